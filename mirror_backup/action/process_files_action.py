import threading
import time
from pathlib import Path
from typing import List, Optional

from typing_extensions import override

from mirror_backup.action import Action
from mirror_backup.action.transcode_file_action import TranscodeFileAction
from mirror_backup.exceptions import FileTranscodeError, UnrecordablePath
from mirror_backup.hash_ledger import HashLedger
from mirror_backup.types.backup_reporter import BackupReporter
from mirror_backup.types.backup_result import BackupResult
from mirror_backup.types.transcode_failure import TranscodeFailures
from mirror_backup.utils.thread_pool import BlockingThreadPool


class ProcessFilesAction(Action[BackupResult]):
	"""
	Transcode the given files in parallel, and record the hash of every succeeded file into the ledger.
	A failed file is reported and left unrecorded, so it will be a candidate again on the next run
	"""
	def __init__(
			self, files: List[Path], source_root: Path, destination_root: Path,
			ledger: HashLedger, reporter: BackupReporter, *,
			max_workers: Optional[int] = None,
	):
		super().__init__()
		self.files = files
		self.source_root = source_root
		self.destination_root = destination_root
		self.ledger = ledger
		self.reporter = reporter
		self.max_workers = max_workers

		self.__failures = TranscodeFailures()
		self.__lock = threading.Lock()
		self.__done_count = 0
		self.__succeeded_count = 0
		self.__raw_size = 0
		self.__stored_size = 0

	def __on_failure(self, path: Path, error: FileTranscodeError):
		self.__failures.add(path, error)
		with self.__lock:
			self.__done_count += 1
			self.reporter.on_error(path, error)
			self.reporter.on_progress(self.__done_count, len(self.files), path)

	def __process_one(self, path: Path):
		if not self.ledger.is_recordable(path):
			# no artifact for a path the ledger cannot record
			self.__on_failure(path, UnrecordablePath(path))
			return

		try:
			tr = TranscodeFileAction(path, self.source_root, self.destination_root).run()
		except FileTranscodeError as e:
			self.__on_failure(path, e)
			return

		# the ledger lock is held only for this single insert
		self.ledger.set(path, tr.hash)

		with self.__lock:
			self.__done_count += 1
			self.__succeeded_count += 1
			self.__raw_size += tr.raw_size
			self.__stored_size += tr.stored_size
			self.reporter.on_progress(self.__done_count, len(self.files), path)

	@override
	def run(self) -> BackupResult:
		start_time = time.time()

		with BlockingThreadPool('transcoder', max_workers=self.max_workers) as pool:
			for path in self.files:
				pool.submit(self.__process_one, path)

		self.logger.debug('Processed {} files in {:.2f}s, succeeded {}, failed {}, size {} -> {}'.format(
			len(self.files), time.time() - start_time,
			self.__succeeded_count, len(self.__failures), self.__raw_size, self.__stored_size,
		))
		return BackupResult(
			candidate_count=len(self.files),
			succeeded_count=self.__succeeded_count,
			failures=self.__failures,
			raw_size=self.__raw_size,
			stored_size=self.__stored_size,
		)
