import os
import threading
from pathlib import Path


def write_bytes_atomically(path: Path, data: bytes):
	"""
	Write to a temp file next to the target, then replace the target with it,
	so readers either see the old content or the new content
	"""
	path.parent.mkdir(parents=True, exist_ok=True)
	temp_path = path.parent / f'.{path.name}.{os.getpid()}_{threading.current_thread().ident}.tmp'
	try:
		with open(temp_path, 'wb') as f:
			f.write(data)
			f.flush()
			os.fsync(f.fileno())
		os.replace(temp_path, path)
	finally:
		temp_path.unlink(missing_ok=True)


def mkdir_parents(path: Path):
	"""
	Like path.mkdir(parents=True, exist_ok=True), but without recursion, so the depth is not limited by the recursion limit
	"""
	missing = []
	while not path.exists() and path != path.parent:
		missing.append(path)
		path = path.parent
	for p in reversed(missing):
		p.mkdir(exist_ok=True)
