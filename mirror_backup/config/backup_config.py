from typing import List

from mcdreforged.api.utils import Serializable

from mirror_backup.compressors import CompressMethod
from mirror_backup.types.hash_method import HashMethod
from mirror_backup.types.path_filter import PathFilter


class BackupConfig(Serializable):
	blacklist_dirs: List[str] = [
		'node_modules',
		'target',
		'dist',
		'.git',
	]
	blacklist_extensions: List[str] = [
		'exe',
		'dll',
		'obj',
	]
	compress_method: CompressMethod = CompressMethod.zstd
	hash_method: HashMethod = HashMethod.blake3

	def create_path_filter(self) -> PathFilter:
		return PathFilter.of(self.blacklist_dirs, self.blacklist_extensions)

	def add_blacklist_items(self, items: List[str]):
		"""
		Items starting with "." are file extensions, others are file / directory names
		"""
		for item in items:
			if item.startswith('.'):
				ext = item.lstrip('.')
				if ext not in self.blacklist_extensions:
					self.blacklist_extensions = [*self.blacklist_extensions, ext]
			elif item not in self.blacklist_dirs:
				self.blacklist_dirs = [*self.blacklist_dirs, item]
