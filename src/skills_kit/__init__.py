from loguru import logger

# Disable logging by default for library usage.
# Application entry points (e.g., skills_kit.cli) should call logger.enable("skills_kit")
# to enable logging.
logger.disable("skills_kit")
