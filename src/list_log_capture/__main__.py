"""Run the capture CLI with ``python -m list_log_capture``."""

from list_log_capture.cli import cli

if __name__ == "__main__":
    cli.run()
