"""Web API and dashboard for StoneForged-Intel."""


def __getattr__(name: str):
    # Avoid importing the full FastAPI app (and initializing the DB) at package import time.
    if name == "create_app":
        from stoneforged.web.app import create_app

        globals()["create_app"] = create_app
        return create_app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["create_app"]
