"""
The hash ledger: which source files have already been backed up, and the content hash they had at that time
"""
import threading
from pathlib import Path
from typing import Dict, Optional, Union

import pydantic
from pydantic import BaseModel

from mirror_backup import logger
from mirror_backup.exceptions import LedgerLoadError, LedgerSaveError
from mirror_backup.types.hash_method import is_recordable_digest
from mirror_backup.utils import file_utils, misc_utils, path_utils

PathLike = Union[str, Path]


def _check_hashes(hashes: Dict[str, str]):
	for path, hash_ in hashes.items():
		if not is_recordable_digest(hash_):
			raise ValueError('bad hash {!r} for path {!r}'.format(hash_, path_utils.to_display_str(path)))


class LedgerFile(BaseModel):
	"""
	The persisted format: {"hashes": {"/abs/path/to/file": "<hex digest>"}}
	"""
	hashes: Dict[str, str]

	@pydantic.field_validator('hashes')
	@classmethod
	def check_hashes(cls, hashes: Dict[str, str]) -> Dict[str, str]:
		_check_hashes(hashes)
		return hashes


class HashLedger:
	def __init__(self, hashes: Optional[Dict[str, str]] = None):
		"""
		:raise ValueError: if any of the given hashes is not a lowercase hex digest
		"""
		if hashes is not None:
			_check_hashes(hashes)
		self.__hashes: Dict[str, str] = dict(hashes) if hashes is not None else {}
		self.__lock = threading.Lock()

	@classmethod
	def is_recordable(cls, path: PathLike) -> bool:
		"""
		The ledger file is UTF-8 JSON, so a file name with undecodable bytes cannot round-trip through it
		"""
		return path_utils.is_utf8_path(path)

	@classmethod
	def __key(cls, path: PathLike) -> str:
		return str(path)

	def has(self, path: PathLike) -> bool:
		with self.__lock:
			return self.__key(path) in self.__hashes

	def get(self, path: PathLike) -> Optional[str]:
		with self.__lock:
			return self.__hashes.get(self.__key(path))

	def set(self, path: PathLike, hash_: str):
		"""
		:raise ValueError: if the path cannot be stored losslessly, or the hash is not a lowercase hex digest
		"""
		if not self.is_recordable(path):
			raise ValueError('Path {!r} is not valid UTF-8'.format(path_utils.to_display_str(path)))
		if not is_recordable_digest(hash_):
			raise ValueError('Bad hash {!r}'.format(hash_))
		with self.__lock:
			self.__hashes[self.__key(path)] = hash_

	def len(self) -> int:
		with self.__lock:
			return len(self.__hashes)

	def __len__(self) -> int:
		return self.len()

	def snapshot(self) -> Dict[str, str]:
		with self.__lock:
			return self.__hashes.copy()

	def __repr__(self) -> str:
		return misc_utils.represent(self, attrs={'size': self.len()})

	# ==================== Persistence ====================

	@classmethod
	def load(cls, path: Path) -> 'HashLedger':
		"""
		A missing ledger file means nothing has been backed up yet, so an empty ledger is returned

		:raise LedgerLoadError: if the ledger file exists, but cannot be read or parsed
		"""
		try:
			with open(path, 'rb') as f:
				content = f.read()
		except FileNotFoundError:
			logger.get().debug('Hash ledger {!r} does not exist, starting with an empty one'.format(str(path)))
			return cls()
		except OSError as e:
			raise LedgerLoadError(path, e) from e

		try:
			ledger_file = LedgerFile.model_validate_json(content)
		except pydantic.ValidationError as e:
			raise LedgerLoadError(path, e) from e

		logger.get().debug('Loaded {} hashes from hash ledger {!r}'.format(len(ledger_file.hashes), str(path)))
		return cls(ledger_file.hashes)

	def save(self, path: Path):
		"""
		Overwrite the ledger file with the full current content, atomically

		:raise LedgerSaveError: if the ledger file cannot be written
		"""
		hashes = self.snapshot()
		content = LedgerFile(hashes=dict(sorted(hashes.items()))).model_dump_json(indent=2)
		try:
			file_utils.write_bytes_atomically(path, content.encode('utf8'))
		except OSError as e:
			raise LedgerSaveError(path, e) from e
		logger.get().debug('Saved {} hashes to hash ledger {!r}'.format(len(hashes), str(path)))
