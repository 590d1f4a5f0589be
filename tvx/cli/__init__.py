# tvx CLI - Command line for decoding and validating test vectors

from tvx.cli.main import app

__all__ = ["app"]
