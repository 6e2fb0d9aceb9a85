# src/atlas_configurability/core/registry/deferred.py
"""
Configuração diferida (late binding).

Um módulo pode se registrar antes de possuir seu ponto de entrada
`configure` definitivo (ex.: classe base registra, subclasse ou código de
setup instala o comportamento depois). Este módulo garante que ele seja
configurado assim que o ponto de entrada final existir.

Protocolo em duas fases:
    1. `registry.register(module)` retorna um `RegistrationHandle`
    2. após instalar o `configure` definitivo, o módulo chama
       `handle.late_bind()` (ou `registry.late_bind(module)`)

Invariantes:
    - Cada novo ponto de entrada recebe a seção exatamente uma vez
    - Chamar `late_bind` sem trocar o ponto de entrada não dispara nada
    - Sem documento carregado, `late_bind` não faz nada; o primeiro
      `distribute` configura o módulo normalmente

Limites explícitos:
    - Não observa definição de métodos por introspecção; o módulo avisa
      explicitamente
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from .module import entry_point_identity

if TYPE_CHECKING:
    from .registry import ConfigRegistry

logger = logging.getLogger(__name__)

_UNBOUND = object()


class RegistrationHandle:
    """
    Registro de um módulo no `ConfigRegistry`.

    Guarda a identidade do ponto de entrada que recebeu configuração pela
    última vez, permitindo detectar a troca do `configure` sem introspecção.
    """

    def __init__(self, registry: "ConfigRegistry", module: Any) -> None:
        self.registry = registry
        self.module = module
        self._bound_entry_point: Any = _UNBOUND

    @property
    def is_bound(self) -> bool:
        """True se algum ponto de entrada já recebeu configuração."""
        return self._bound_entry_point is not _UNBOUND

    def mark_bound(self) -> None:
        self._bound_entry_point = entry_point_identity(self.module)

    def needs_rebind(self) -> bool:
        return self._bound_entry_point is not entry_point_identity(self.module)

    def late_bind(self, entry_point: Optional[Callable[[Any], Any]] = None) -> bool:
        """
        Configura o módulo com seu ponto de entrada definitivo.

        Args:
            entry_point: `configure` opcional a instalar no módulo antes do bind.

        Returns:
            bool: True se o módulo foi (re)configurado nesta chamada.
        """
        if entry_point is not None:
            setattr(self.module, "configure", entry_point)

        if self.registry.loaded_config is None:
            logger.debug("No config loaded yet; deferring configuration of %r", self.module)
            return False

        if not self.needs_rebind():
            return False

        logger.debug("Re-configuring %r via deferred config hook.", self.module)
        self.registry.install_config(self.registry.loaded_config, self.module)
        return True

    def __repr__(self) -> str:
        return f"<RegistrationHandle module={self.module!r} bound={self.is_bound}>"
