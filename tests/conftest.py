#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from vardump.command import ExportCommand
from vardump.display import ColorMode, ContIndentStyle, DumpOptions
from vardump.escape import EscapeSequence
from vardump.iterable import _REGISTRY, resolve_traits
from vardump.kinds import value_kind


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def plain() -> DumpOptions:
    """Default layout, no escape codes."""
    return DumpOptions.plain()


@pytest.fixture
def flat() -> DumpOptions:
    """No escape codes, elements forced onto their own lines only when too wide."""
    return DumpOptions(color=ColorMode.NEVER, cont_indent_style=ContIndentStyle.NEVER)


@pytest.fixture
def command() -> ExportCommand:
    return ExportCommand()


@pytest.fixture
def es() -> EscapeSequence:
    return EscapeSequence()


@pytest.fixture
def clean_traits_registry():
    """Restore the traits registry and the type caches after a test registers traits."""
    saved = dict(_REGISTRY)
    yield _REGISTRY
    _REGISTRY.clear()
    _REGISTRY.update(saved)
    resolve_traits.cache_clear()
    value_kind.cache_clear()
