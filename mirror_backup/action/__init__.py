"""
Actions, the units of work of a backup
"""
import logging
from abc import ABC, abstractmethod
from typing import TypeVar, Generic

_T = TypeVar('_T')


class Action(Generic[_T], ABC):
	def __init__(self):
		from mirror_backup import logger
		from mirror_backup.config.config import Config
		self.logger: logging.Logger = logger.get()
		self.config: Config = Config.get()

	@abstractmethod
	def run(self) -> _T:
		...
