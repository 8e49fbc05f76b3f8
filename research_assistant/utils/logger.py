import sys

from loguru import logger

from research_assistant.config.settings import Settings, settings


def setup_logger(config: Settings = settings):
	# Remove default handler
	logger.remove()

	# Console handler
	logger.add(
		sys.stderr,
		level=config.LOG_LEVEL,
		format='<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>',
	)

	# File handler
	if config.LOG_FILE:
		logger.add(
			config.LOG_FILE,
			rotation='50 MB',
			retention='10 days',
			level=config.LOG_LEVEL,
			format='{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}',
			serialize=False,
		)


# Initialize logger
setup_logger()
