from pathlib import Path

from mirror_backup.utils import path_utils


class MirrorBackupError(Exception):
	pass


class ConfigError(MirrorBackupError):
	pass


class MissingConfigPath(ConfigError):
	def __init__(self, field_name: str):
		super().__init__('{} is not set in the config'.format(field_name))
		self.field_name = field_name


class FileTranscodeError(MirrorBackupError):
	def __init__(self, path: Path, cause: Exception):
		super().__init__('{}: ({}) {}'.format(path_utils.to_display_str(path), type(cause).__name__, cause))
		self.path = path
		self.cause = cause


class SourcePathNotInRoot(FileTranscodeError):
	def __init__(self, path: Path, source_root: Path):
		super().__init__(path, ValueError('{!r} is not inside the source root {!r}'.format(path_utils.to_display_str(path), str(source_root))))
		self.source_root = source_root


class UnrecordablePath(FileTranscodeError):
	def __init__(self, path: Path):
		super().__init__(path, ValueError('the path is not valid UTF-8, so it cannot be recorded in the hash ledger'))


class LedgerLoadError(MirrorBackupError):
	def __init__(self, path: Path, cause: Exception):
		super().__init__('Failed to load hash ledger {!r}: {}'.format(str(path), cause))
		self.path = path
		self.cause = cause


class LedgerSaveError(MirrorBackupError):
	def __init__(self, path: Path, cause: Exception):
		super().__init__('Failed to save hash ledger {!r}: {}'.format(str(path), cause))
		self.path = path
		self.cause = cause
