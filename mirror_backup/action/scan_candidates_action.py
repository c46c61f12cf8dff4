import collections
import os
import time
from pathlib import Path
from typing import Deque, List, Optional

from typing_extensions import override

from mirror_backup.action import Action
from mirror_backup.hash_ledger import HashLedger
from mirror_backup.types.path_filter import PathFilter


class ScanCandidatesAction(Action[List[Path]]):
	"""
	Walk the source tree and collect the files to back up: files that are neither excluded by the filter, nor recorded in the ledger

	Symlinked directories are not descended into. Unreadable entries are skipped
	"""
	def __init__(self, source_root: Path, ledger: HashLedger, path_filter: Optional[PathFilter] = None):
		super().__init__()
		self.source_root = source_root
		self.ledger = ledger
		self.path_filter = path_filter or self.config.backup.create_path_filter()

		self.__excluded_count = 0
		self.__recorded_count = 0
		self.__skipped_count = 0

	def __scan_dir(self, dir_path: Path, dir_queue: Deque[Path], result: List[Path]):
		try:
			with os.scandir(dir_path) as it:
				entries = list(it)
		except OSError as e:
			self.logger.debug('Skipping unreadable directory {!r}: {}'.format(str(dir_path), e))
			self.__skipped_count += 1
			return

		for entry in entries:
			path = dir_path / entry.name
			try:
				if entry.is_dir(follow_symlinks=False):
					if self.path_filter.is_name_excluded(entry.name):
						self.__excluded_count += 1
					else:
						dir_queue.append(path)
					continue
				if not entry.is_file():  # symlinks to directories, broken symlinks, special files
					self.logger.debug('Skipping non-regular file {!r}'.format(str(path)))
					self.__skipped_count += 1
					continue
			except OSError as e:
				self.logger.debug('Skipping unreadable entry {!r}: {}'.format(str(path), e))
				self.__skipped_count += 1
				continue

			if self.path_filter.is_excluded(path):
				self.__excluded_count += 1
			elif self.ledger.has(path):
				self.__recorded_count += 1
			else:
				result.append(path)

	@override
	def run(self) -> List[Path]:
		start_time = time.time()
		result: List[Path] = []

		if not self.source_root.is_dir():
			self.logger.warning('Source path {!r} is not an existing directory, nothing to scan'.format(str(self.source_root)))
			return result
		if self.path_filter.is_dir_excluded(self.source_root):
			self.logger.warning('Source path {!r} is inside a blacklisted directory, every file in it will be excluded'.format(str(self.source_root)))

		# iterative, so the depth of the tree is not limited by the recursion limit
		dir_queue: Deque[Path] = collections.deque([self.source_root])
		while len(dir_queue) > 0:
			self.__scan_dir(dir_queue.popleft(), dir_queue, result)

		self.logger.debug('Scan done, cost {:.2f}s, candidates {}, excluded {}, already recorded {}, skipped {}'.format(
			time.time() - start_time, len(result), self.__excluded_count, self.__recorded_count, self.__skipped_count,
		))
		return result
