"""Application entry point for the K2 session auth server."""

from k2auth.app import App
from k2auth.config import Config
from k2auth.logging import setup_logging
from k2auth.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
