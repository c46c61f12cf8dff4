import os
from pathlib import Path
from typing import Union


def is_relative_to(child: Path, parent: Union[str, Path]) -> bool:
	if hasattr(child, 'is_relative_to'):  # python3.9+
		return child.is_relative_to(parent)
	else:
		try:
			child.relative_to(parent)
		except ValueError:
			return False
		else:
			return True


def append_suffix(file_name: str, suffix: str) -> str:
	"""
	Append a suffix to the existing extension of the file name

	- "a.txt" -> "a.txt.zst"
	- "data" -> "data..zst", an extensionless file gets an empty pseudo extension and the separator dot
	"""
	from mirror_backup.types.path_filter import get_extension
	if get_extension(file_name) is not None:
		return f'{file_name}.{suffix}'
	else:
		return f'{file_name}..{suffix}'


def to_display_str(path: Union[str, Path]) -> str:
	"""
	The path as printable text. Bytes in the name that are not valid UTF-8 are shown as escapes, e.g. "bad\\xff.txt"
	"""
	return os.fsencode(str(path)).decode('utf8', errors='backslashreplace')


def is_utf8_path(path: Union[str, Path]) -> bool:
	try:
		str(path).encode('utf8')
	except UnicodeEncodeError:  # the surrogate escapes of undecodable bytes
		return False
	return True
