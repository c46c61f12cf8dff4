import functools
import json
import logging
from pathlib import Path
from typing import Optional

from mcdreforged.api.utils import Serializable

from mirror_backup.config.backup_config import BackupConfig
from mirror_backup.exceptions import ConfigError, MissingConfigPath


class Config(Serializable):
	debug: bool = False
	concurrency: int = 0

	source_path: Optional[str] = None
	destination_path: Optional[str] = None
	hash_file_path: Optional[str] = None

	backup: BackupConfig = BackupConfig()

	# ==================== Instance getters ====================

	@classmethod
	@functools.lru_cache
	def __get_default(cls) -> 'Config':
		return Config.get_default()

	@classmethod
	def get(cls) -> 'Config':
		if _config is None:
			return cls.__get_default()
		return _config

	# ==================== Field getters ====================

	def get_effective_concurrency(self) -> int:
		if self.concurrency <= 0:
			import multiprocessing
			return max(1, multiprocessing.cpu_count())
		else:
			return self.concurrency

	@property
	def source_root(self) -> Path:
		if self.source_path is None:
			raise MissingConfigPath('source_path')
		return Path(self.source_path).absolute()

	@property
	def destination_root(self) -> Path:
		if self.destination_path is None:
			raise MissingConfigPath('destination_path')
		return Path(self.destination_path).absolute()

	@property
	def hash_file(self) -> Optional[Path]:
		if self.hash_file_path is None:
			return None
		return Path(self.hash_file_path)

	# ==================== File IO ====================

	@classmethod
	def load_from_file(cls, path: Path) -> 'Config':
		"""
		:raise FileNotFoundError: if the config file does not exist
		:raise ConfigError: if the config file is unreadable or invalid
		"""
		try:
			with open(path, 'r', encoding='utf8') as f:
				data = json.load(f)
		except FileNotFoundError:
			raise
		except (OSError, ValueError) as e:
			raise ConfigError('Failed to read config file {!r}: {}'.format(str(path), e)) from e

		if not isinstance(data, dict):
			raise ConfigError('Bad config file {!r}: the root element should be an object'.format(str(path)))
		try:
			return cls.deserialize(data)
		except (ValueError, TypeError, KeyError) as e:
			raise ConfigError('Bad config file {!r}: {}'.format(str(path), e)) from e

	def save_to_file(self, path: Path):
		path.parent.mkdir(parents=True, exist_ok=True)
		with open(path, 'w', encoding='utf8') as f:
			json.dump(self.serialize(), f, indent=2, ensure_ascii=False)


_config: Optional[Config] = None


def set_config_instance(cfg: Optional[Config]):
	"""
	:param cfg: the config to use globally. None to reset to the default config
	"""
	global _config
	_config = cfg

	if cfg is not None and cfg.debug:
		from mirror_backup import logger
		logger.get().setLevel(logging.DEBUG)
		logger.get().debug('debug on')
