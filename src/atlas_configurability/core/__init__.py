# src/atlas_configurability/core/__init__.py
"""
Core do Atlas Configurability.

Componentes principais:
    - config       → container, merge, chaves, loader e documento
    - registry     → registro de módulos, resolução de seções, defaults e
                     configuração diferida
    - configurable → mixin com o comportamento padrão de um módulo
    - settings     → declaração de settings com defaults
    - errors       → hierarquia canônica de exceções

Princípios fundamentais:
    - Módulos não conhecem uns aos outros nem uma sequência de bootstrap
    - Execução síncrona; falhas de módulos propagam (fail-fast)
"""
