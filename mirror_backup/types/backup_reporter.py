import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from typing_extensions import override

from mirror_backup.utils import path_utils

if TYPE_CHECKING:
	from mirror_backup.types.backup_result import BackupResult


class BackupReporter(ABC):
	"""
	Receives the user-facing events of a backup job.
	on_progress and on_error are invoked from worker threads, one call at a time
	"""

	@abstractmethod
	def on_start(self, message: str, total: int):
		...

	@abstractmethod
	def on_progress(self, done: int, total: int, path: Path):
		...

	@abstractmethod
	def on_error(self, path: Path, error: Exception):
		...

	@abstractmethod
	def on_complete(self, message: str, result: 'BackupResult'):
		...


class LoggingBackupReporter(BackupReporter):
	def __init__(self, logger: Optional[logging.Logger] = None, *, progress_step: float = 0.1):
		if logger is None:
			from mirror_backup import logger as logger_
			logger = logger_.get()
		self.logger = logger
		self.progress_step = progress_step
		self.__next_report = 0.0
		self.__lock = threading.Lock()

	@override
	def on_start(self, message: str, total: int):
		with self.__lock:
			self.__next_report = self.progress_step
		self.logger.info(message)

	@override
	def on_progress(self, done: int, total: int, path: Path):
		self.logger.debug('Processed {!r} ({}/{})'.format(str(path), done, total))
		with self.__lock:
			if total <= 0 or done / total < self.__next_report and done != total:
				return
			while self.__next_report <= done / total:
				self.__next_report += self.progress_step
		self.logger.info('Progress: {}/{} ({:.0f}%)'.format(done, total, 100 * done / total))

	@override
	def on_error(self, path: Path, error: Exception):
		self.logger.error('Error processing file {}: {}'.format(path_utils.to_display_str(path), error))

	@override
	def on_complete(self, message: str, result: 'BackupResult'):
		self.logger.info(message)
		if result.failed_count > 0:
			self.logger.warning('{} of {} files failed and will be retried on the next run'.format(result.failed_count, result.candidate_count))
