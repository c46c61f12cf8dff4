import argparse
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from mirror_backup import logger, constants
from mirror_backup.cli.return_codes import ErrorReturnCodes
from mirror_backup.config.config import Config, set_config_instance
from mirror_backup.exceptions import ConfigError


class CliCommandHandlerBase(ABC):
	def __init__(self):
		self.logger: logging.Logger = logger.get()

	@property
	def config(self) -> Config:
		return Config.get()

	# ==================== Utils ====================

	def init_environment(self, config_path: Path):
		try:
			config = Config.load_from_file(config_path)
		except FileNotFoundError:
			self.logger.error('No configuration file found at {!r}. Please run setup first'.format(config_path.as_posix()))
			ErrorReturnCodes.config_error.sys_exit()
		except ConfigError as e:
			self.logger.error('Failed to load configuration: {}'.format(e))
			ErrorReturnCodes.config_error.sys_exit()
		set_config_instance(config)
		self.logger.debug('Config loaded from {!r}'.format(config_path.as_posix()))


class CliCommandAdapterBase(ABC):
	@property
	@abstractmethod
	def command(self) -> str:
		raise NotImplementedError()

	@property
	@abstractmethod
	def description(self) -> str:
		raise NotImplementedError()

	@abstractmethod
	def build_parser(self, parser: argparse.ArgumentParser):
		raise NotImplementedError()

	@abstractmethod
	def run(self, args: argparse.Namespace):
		raise NotImplementedError()

	# ==================== Utils ====================

	@classmethod
	def _add_config_argument(cls, parser: argparse.ArgumentParser):
		parser.add_argument('-c', '--config', default=constants.DEFAULT_CONFIG_FILE_NAME, help='Path to the configuration file')
