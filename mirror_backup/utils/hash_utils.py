from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
	from mirror_backup.types.hash_method import Hasher, HashMethod


def create_hasher(*, hash_method: Optional['HashMethod'] = None) -> 'Hasher':
	if hash_method is None:
		from mirror_backup.config.config import Config
		hash_method = Config.get().backup.hash_method
	return hash_method.value.create_hasher()
