import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

def configure_logging(level: str = "INFO") -> None:
    # no-op when the root logger already has handlers (uvicorn, pytest)
    logging.basicConfig(level=level.upper(), format=_FORMAT)
