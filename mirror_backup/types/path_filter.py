import dataclasses
from pathlib import PurePath
from typing import FrozenSet, Iterable, Optional, Union


def get_extension(file_name: str) -> Optional[str]:
	"""
	The text after the last dot of the file name, or None if there's no dot, or the only dot is the leading one

	Examples: "a.txt" -> "txt", "a.tar.gz" -> "gz", "name." -> "", ".bashrc" -> None, "data" -> None
	"""
	idx = file_name.rfind('.')
	if idx <= 0:
		return None
	return file_name[idx + 1:]


@dataclasses.dataclass(frozen=True)
class PathFilter:
	blacklist_names: FrozenSet[str] = frozenset()
	blacklist_extensions: FrozenSet[str] = frozenset()  # case-sensitive, without the leading dot

	@classmethod
	def of(cls, names: Iterable[str], extensions: Iterable[str]) -> 'PathFilter':
		return cls(frozenset(names), frozenset(extensions))

	def is_name_excluded(self, name: str) -> bool:
		return name in self.blacklist_names

	def is_dir_excluded(self, path: Union[str, PurePath]) -> bool:
		"""
		If the directory itself, or any of its ancestors up to the filesystem root, has a blacklisted name
		"""
		path = PurePath(path)
		return self.is_name_excluded(path.name) or any(self.is_name_excluded(parent.name) for parent in path.parents)

	def is_excluded(self, path: Union[str, PurePath]) -> bool:
		path = PurePath(path)

		ext = get_extension(path.name)
		if ext is not None and ext in self.blacklist_extensions:
			return True

		return self.is_dir_excluded(path)
