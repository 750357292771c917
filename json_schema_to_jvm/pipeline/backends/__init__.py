"""
Emitters - render IR units as source code, one implementation per dialect.
"""

from ..config import CodeGeneratorConfig
from ..errors import ConfigurationError
from .base import Emitter
from .java_backend import JavaEmitter
from .kotlin_backend import KotlinEmitter

EMITTERS: dict[str, type[Emitter]] = {
    "java": JavaEmitter,
    "kotlin": KotlinEmitter,
}


def create_emitter(config: CodeGeneratorConfig) -> Emitter:
    """Select the emitter for the configured language."""
    try:
        emitter_class = EMITTERS[config.language]
    except KeyError:
        raise ConfigurationError(f"Language not supported: {config.language}") from None
    return emitter_class(config)


__all__ = [
    "Emitter",
    "JavaEmitter",
    "KotlinEmitter",
    "EMITTERS",
    "create_emitter",
]
