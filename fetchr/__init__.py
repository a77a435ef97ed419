from ._dispatch import build_client, copy_body, dispatch
from ._exceptions import BodyCopyError, FetchError, SendError
from ._models import DEFAULT_URL, PRINT_BODY_FLAG, RequestMethod, RequestSpec
from ._output import format_head_plain, print_head_rich, status_color
from .cli import main

__title__ = "fetchr"
__description__ = "A minimal command-line HTTP client."
__version__ = "0.1.0"

_EXCLUDED_FROM_ALL = {"cli", "main"}

__all__ = sorted(
    (
        member
        for member in list(vars().keys())
        if (
            not member.startswith("_")
            or member in ["__description__", "__title__", "__version__"]
        )
        and member not in _EXCLUDED_FROM_ALL
    ),
    key=str.casefold,
)
