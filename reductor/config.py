"""
Generation configuration.

Environment Variables:
    REDUCTOR_REQUIRE_ACTION_CREATORS: true/false - default: true
        When false, a handler without a source contract whose tag no
        contract declares binds to an implicit shape taken from the handler
        itself; the generated ActionCreator then becomes its builder.
    REDUCTOR_IMPL_SUFFIX: Suffix of generated reducer classes - default: Impl
    REDUCTOR_BUILDER_SUFFIX: Suffix of generated contract builders - default: _AutoImpl
"""

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class GenerationConfig:
    require_action_creators: bool = True
    impl_suffix: str = "Impl"
    builder_suffix: str = "_AutoImpl"

    @classmethod
    def from_env(cls) -> "GenerationConfig":
        return cls(
            require_action_creators=_env_bool("REDUCTOR_REQUIRE_ACTION_CREATORS", True),
            impl_suffix=os.getenv("REDUCTOR_IMPL_SUFFIX", "Impl"),
            builder_suffix=os.getenv("REDUCTOR_BUILDER_SUFFIX", "_AutoImpl"),
        )

    def impl_name(self, reducer_qualname: str) -> str:
        return reducer_qualname.replace(".", "_") + self.impl_suffix

    def builder_name(self, contract_qualname: str) -> str:
        """Name of the generated builder for a contract; nested names are joined by "_"."""
        return contract_qualname.replace(".", "_") + self.builder_suffix


DEFAULT_CONFIG = GenerationConfig()
