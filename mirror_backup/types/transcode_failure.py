import dataclasses
import threading
from pathlib import Path
from typing import List, Iterator

from mirror_backup.exceptions import FileTranscodeError
from mirror_backup.utils import path_utils


@dataclasses.dataclass(frozen=True)
class TranscodeFailure:
	path: Path
	error: Exception


class TranscodeFailures:
	"""
	Thread-safe collector of per-file failures. A failed file never aborts its siblings
	"""
	def __init__(self):
		self.__lock = threading.Lock()
		self.failures: List[TranscodeFailure] = []

	def add(self, path: Path, error: Exception):
		with self.__lock:
			self.failures.append(TranscodeFailure(path, error))

	def __len__(self) -> int:
		return len(self.failures)

	def __iter__(self) -> Iterator[TranscodeFailure]:
		return self.failures.__iter__()

	def to_lines(self) -> List[str]:
		result = []
		for failure in self.failures:
			error = failure.error.cause if isinstance(failure.error, FileTranscodeError) else failure.error
			result.append('{}: ({}) {}'.format(path_utils.to_display_str(failure.path), type(error).__name__, error))
		return result
