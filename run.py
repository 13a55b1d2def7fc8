from cli import cli
from config.settings import settings
from utils.logger_utils import configure_logging

configure_logging(settings.app.log_file, settings.app.log_level)

if __name__ == "__main__":
    cli()
