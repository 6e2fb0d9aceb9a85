# src/atlas_configurability/core/registry/registry.py
"""
Registry de módulos configuráveis.

Este módulo define o `ConfigRegistry`, o ponto central de coordenação de
"quem quer configuração" e "qual configuração está ativa".

Responsabilidades do módulo:
    - Registrar módulos por identidade (registro idempotente)
    - Distribuir o documento carregado: cada módulo recebe a seção
      resolvida pela sua config key
    - Disparar post-configure hooks uma vez por distribuição
    - Configurar imediatamente módulos registrados depois da distribuição
    - Agregar os defaults declarados pelos módulos

Política de redistribuição:
    - Cada `distribute` reinvoca o `configure` de todos os módulos, mesmo
      que a seção seja logicamente idêntica à anterior (sem deduplicação)

Política de falhas:
    - Fail-fast: a primeira falha de `configure` interrompe a distribuição
      e propaga como `ModuleDispatchError`; módulos já configurados
      permanecem configurados (sem semântica transacional)

Concorrência:
    - Execução síncrona, sem locks internos; acesso concorrente deve ser
      serializado pela aplicação

Limites explícitos:
    - Não lê arquivos (ver `core.config.loader`)
    - Não valida o conteúdo das seções
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional

from ..config.struct import ConfigStruct
from ..errors import ModuleDispatchError
from . import defaults as _defaults
from .deferred import RegistrationHandle
from .module import entry_point_of, key_for
from .resolver import resolve

logger = logging.getLogger(__name__)

PostConfigureHook = Callable[[], Any]


class ConfigRegistry:
    """
    Registro de módulos configuráveis e da configuração atualmente carregada.

    Exemplos:
        >>> registry = ConfigRegistry()
        >>> class Db:
        ...     config_key = "db"
        ...     def configure(self, section):
        ...         self.section = section
        >>> db = Db()
        >>> _ = registry.register(db)
        >>> registry.distribute({"db": {"host": "localhost"}})
        >>> db.section
        {'host': 'localhost'}
    """

    def __init__(self) -> None:
        self._registrations: List[RegistrationHandle] = []
        self._hooks: List[PostConfigureHook] = []
        self.loaded_config: Any = None
        self.hooks_ran: bool = False

    # -----------------------------
    # Registro
    # -----------------------------
    def _handle_for(self, module: Any) -> Optional[RegistrationHandle]:
        for handle in self._registrations:
            if handle.module is module:
                return handle
        return None

    def register(self, module: Any) -> RegistrationHandle:
        """
        Registra `module`; se já houver configuração carregada, configura-o.

        Registrar novamente o mesmo objeto retorna o handle existente.
        """
        handle = self._handle_for(module)
        if handle is not None:
            return handle

        logger.debug("Adding configurability to %r", module)
        handle = RegistrationHandle(self, module)
        self._registrations.append(handle)

        if self.loaded_config is not None:
            self.install_config(self.loaded_config, module)

        return handle

    def unregister(self, module: Any) -> bool:
        """
        Remove `module` do registry.

        Returns:
            bool: False se o módulo não estava registrado.
        """
        handle = self._handle_for(module)
        if handle is None:
            return False
        self._registrations.remove(handle)
        return True

    def is_registered(self, module: Any) -> bool:
        return self._handle_for(module) is not None

    def modules(self) -> List[Any]:
        """Módulos registrados, na ordem de registro (ordem de distribuição)."""
        return [handle.module for handle in self._registrations]

    def handle(self, module: Any) -> RegistrationHandle:
        """Retorna o handle de `module`; KeyError se não registrado."""
        handle = self._handle_for(module)
        if handle is None:
            raise KeyError(module)
        return handle

    # -----------------------------
    # Distribuição
    # -----------------------------
    def distribute(self, document: Any) -> None:
        """
        Distribui `document` entre todos os módulos registrados e dispara
        os post-configure hooks.

        Raises:
            ModuleDispatchError: se o `configure` de algum módulo falhar.
        """
        logger.debug(
            "Splitting up config %r between %d objects with configurability.",
            document,
            len(self._registrations),
        )
        self.reset()
        self.loaded_config = document

        for handle in list(self._registrations):
            self.install_config(document, handle.module)

        self.run_post_configure_hooks()

    def install_config(self, document: Any, module: Any) -> None:
        """Resolve e entrega a seção de `document` correspondente a `module`."""
        key = key_for(module)
        logger.debug("Configuring %r with the %s section of the config.", module, key)

        section = resolve(document, key)
        configure = entry_point_of(module)

        if configure is not None:
            try:
                configure(section)
            except Exception as exc:
                raise ModuleDispatchError(
                    f"Failed to configure {module!r} with the {key!r} section: {exc}",
                    module=module,
                    config_key=key,
                ) from exc

        handle = self._handle_for(module)
        if handle is not None:
            handle.mark_bound()

    def reconfigure(self, module: Any) -> bool:
        """
        Reentrega a configuração carregada a `module`.

        Returns:
            bool: False se nenhuma configuração estiver carregada.
        """
        if self.loaded_config is None:
            return False
        self.install_config(self.loaded_config, module)
        return True

    def late_bind(self, module: Any, entry_point: Optional[Callable[[Any], Any]] = None) -> bool:
        """Atalho para `handle(module).late_bind(entry_point)`."""
        return self.handle(module).late_bind(entry_point)

    def reset(self) -> None:
        """Esquece a configuração carregada; módulos continuam registrados."""
        self.loaded_config = None
        self.hooks_ran = False

    # -----------------------------
    # Post-configure hooks
    # -----------------------------
    def register_post_configure_hook(self, callback: PostConfigureHook) -> None:
        """
        Registra `callback` para rodar após cada distribuição.

        Se os hooks já rodaram, o callback é chamado imediatamente.
        """
        if callback not in self._hooks:
            self._hooks.append(callback)

        if self.hooks_ran:
            logger.debug("Post-configure hooks already ran; calling %r now", callback)
            callback()

    def post_configure_hooks(self) -> List[PostConfigureHook]:
        return list(self._hooks)

    def run_post_configure_hooks(self) -> None:
        """Executa os hooks na ordem de registro e marca `hooks_ran`."""
        for hook in list(self._hooks):
            logger.debug("Running post-configure hook %r", hook)
            hook()
        self.hooks_ran = True

    # -----------------------------
    # Defaults
    # -----------------------------
    def gather_defaults(self, collection: Optional[Mapping[Any, Any]] = None) -> dict:
        """
        Agrega os defaults dos módulos registrados, na ordem de registro.

        Ver `core.registry.defaults.gather_defaults`.
        """
        return _defaults.gather_defaults(self.modules(), collection)

    def default_config(self) -> ConfigStruct:
        return _defaults.default_config(self.modules())

    def __repr__(self) -> str:
        return "<ConfigRegistry %d modules; config %s>" % (
            len(self._registrations),
            "loaded" if self.loaded_config is not None else "not loaded",
        )


_registry = ConfigRegistry()


def get_registry() -> ConfigRegistry:
    """Retorna o registry padrão do processo."""
    return _registry


def set_registry(registry: ConfigRegistry) -> ConfigRegistry:
    """Substitui o registry padrão do processo; retorna o anterior."""
    global _registry
    previous, _registry = _registry, registry
    return previous


def register(module: Any) -> RegistrationHandle:
    """Registra `module` no registry padrão do processo."""
    return get_registry().register(module)


def distribute(document: Any) -> None:
    """Distribui `document` pelo registry padrão do processo."""
    get_registry().distribute(document)


def reset() -> None:
    """Esquece a configuração carregada no registry padrão."""
    get_registry().reset()


def register_post_configure_hook(callback: PostConfigureHook) -> None:
    """Registra um post-configure hook no registry padrão."""
    get_registry().register_post_configure_hook(callback)


def gather_defaults(collection: Optional[Mapping[Any, Any]] = None) -> dict:
    """Defaults agregados dos módulos do registry padrão."""
    return get_registry().gather_defaults(collection)


def default_config() -> ConfigStruct:
    return get_registry().default_config()
