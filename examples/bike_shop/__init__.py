from .demo import (  # noqa: F401
    bootstrap_transport,
    run_demo,
    save_with_token,
)

__all__ = [
    "bootstrap_transport",
    "run_demo",
    "save_with_token",
]
