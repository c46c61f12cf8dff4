import dataclasses
from pathlib import Path
from typing import Optional

from typing_extensions import override

from mirror_backup.action import Action
from mirror_backup.action.process_files_action import ProcessFilesAction
from mirror_backup.action.scan_candidates_action import ScanCandidatesAction
from mirror_backup.hash_ledger import HashLedger
from mirror_backup.types.backup_reporter import BackupReporter, LoggingBackupReporter
from mirror_backup.types.backup_result import BackupResult


@dataclasses.dataclass(frozen=True)
class _JobMessages:
	nothing_to_do: str
	start: str
	complete: str


_RUN_MESSAGES = _JobMessages(
	nothing_to_do='No files to backup. Everything is already up to date.',
	start='Backing up {} files',
	complete='Backup completed',
)
_RESUME_MESSAGES = _JobMessages(
	nothing_to_do='No files to resume. The backup is already complete.',
	start='Resuming backup with {} files remaining',
	complete='Resume completed',
)


class BackupJob(Action[BackupResult]):
	"""
	Mirror the source tree into the destination tree, compressing every file that the hash ledger hasn't recorded yet

	The ledger is persisted once, after all files are processed. Files that failed are left out of the ledger,
	so running the job again retries them, and only them
	"""
	def __init__(self, *, ledger: Optional[HashLedger] = None, reporter: Optional[BackupReporter] = None):
		"""
		:param ledger: the ledger to use. Loaded from the configured hash_file_path if not given
		:raise LedgerLoadError: if the ledger file exists but cannot be loaded
		"""
		super().__init__()
		if ledger is None:
			if (hash_file := self.config.hash_file) is not None:
				ledger = HashLedger.load(hash_file)
			else:
				ledger = HashLedger()
		self.ledger = ledger
		self.reporter = reporter or LoggingBackupReporter(self.logger)

	@override
	def run(self) -> BackupResult:
		"""
		:raise ConfigError: if source_path or destination_path is not configured
		:raise LedgerSaveError: if the ledger cannot be persisted
		"""
		return self.__execute(_RUN_MESSAGES)

	def resume(self) -> BackupResult:
		"""
		Continue a previously interrupted backup. It's the same pipeline as run(), only the messages differ
		"""
		return self.__execute(_RESUME_MESSAGES)

	def __execute(self, messages: _JobMessages) -> BackupResult:
		# both raise MissingConfigPath before any IO
		source_root: Path = self.config.source_root
		destination_root: Path = self.config.destination_root

		files = ScanCandidatesAction(source_root, self.ledger).run()
		if len(files) == 0:
			result = BackupResult(candidate_count=0, succeeded_count=0)
			self.reporter.on_complete(messages.nothing_to_do, result)
			return result

		destination_root.mkdir(parents=True, exist_ok=True)
		self.reporter.on_start(messages.start.format(len(files)), len(files))
		result = ProcessFilesAction(files, source_root, destination_root, self.ledger, self.reporter).run()

		if (hash_file := self.config.hash_file) is not None:
			self.ledger.save(hash_file)
			result = dataclasses.replace(result, ledger_saved=True)
		else:
			self.logger.warning('hash_file_path is not set, the progress of this run is not saved')

		self.reporter.on_complete(messages.complete, result)
		return result
