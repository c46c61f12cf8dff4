import contextlib
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from mirror_backup import logger
from mirror_backup.action.scan_candidates_action import ScanCandidatesAction
from mirror_backup.config.config import Config, set_config_instance
from mirror_backup.hash_ledger import HashLedger
from mirror_backup.types.path_filter import PathFilter


def remove_tree(root: Path):
	"""
	shutil.rmtree may recurse once per level, which a very deep tree overflows
	"""
	dirs = []
	stack = [root]
	while len(stack) > 0:
		d = stack.pop()
		dirs.append(d)
		for p in d.iterdir():
			if p.is_dir() and not p.is_symlink():
				stack.append(p)
			else:
				p.unlink()
	for d in reversed(dirs):
		d.rmdir()


class ScanCandidatesActionTestCase(unittest.TestCase):
	def setUp(self):
		self.temp_dir = tempfile.TemporaryDirectory()
		self.root = Path(self.temp_dir.name)
		self.source_root = self.root / 'source'
		self.source_root.mkdir()
		set_config_instance(Config.deserialize({}))

	def tearDown(self):
		set_config_instance(None)
		self.temp_dir.cleanup()

	def __touch(self, rel: str, content: bytes = b'x') -> Path:
		path = self.source_root / rel
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_bytes(content)
		return path

	def __scan(self, ledger: HashLedger = None, path_filter: PathFilter = None):
		return set(ScanCandidatesAction(self.source_root, ledger or HashLedger(), path_filter).run())

	def test_1_collect_nested(self):
		files = {self.__touch(p) for p in ['a.txt', 'data', 'sub/b.py', 'sub/deeper/c.md']}
		(self.source_root / 'empty_dir').mkdir()
		self.assertEqual(files, self.__scan())

	def test_2_blacklist(self):
		keep = self.__touch('a.txt')
		self.__touch('b.exe')
		self.__touch('node_modules/pkg/index.js')
		self.__touch('sub/.git/HEAD')
		self.__touch('sub/target')  # a file named like a blacklisted directory
		self.assertEqual({keep}, self.__scan())

	def test_3_custom_filter(self):
		keep = self.__touch('a.txt')
		self.__touch('b.log')
		self.__touch('cache/c.txt')
		self.assertEqual({keep}, self.__scan(path_filter=PathFilter.of(['cache'], ['log'])))

	def test_4_ledger(self):
		recorded = self.__touch('a.txt')
		fresh = self.__touch('b.txt')
		ledger = HashLedger()
		ledger.set(recorded, '00' * 32)
		ledger.set(self.source_root / 'deleted.txt', '11' * 32)
		self.assertEqual({fresh}, self.__scan(ledger))

	def test_5_symlinks(self):
		target_dir = self.root / 'outside'
		target_dir.mkdir()
		(target_dir / 'o.txt').write_bytes(b'o')
		real = self.__touch('real.txt')

		os.symlink(target_dir, self.source_root / 'dir_link', target_is_directory=True)
		os.symlink(self.root / 'nowhere', self.source_root / 'broken_link')
		os.symlink(real, self.source_root / 'file_link.txt')

		self.assertEqual({real, self.source_root / 'file_link.txt'}, self.__scan())

	def test_6_missing_root(self):
		action = ScanCandidatesAction(self.root / 'not_exists', HashLedger())
		self.assertEqual([], action.run())

	def test_7_empty_root(self):
		self.assertEqual(set(), self.__scan())

	def test_8_deep_tree(self):
		top = self.__touch('top.txt')
		path = self.source_root
		for _ in range(1100):
			path = path / 'a'
			path.mkdir()
		deep = path / 'deep.txt'
		deep.write_bytes(b'x')
		try:
			self.assertEqual({top, deep}, self.__scan())
		finally:
			remove_tree(self.source_root / 'a')

	@unittest.skipIf(not hasattr(os, 'geteuid') or os.geteuid() == 0, 'root can read any directory')
	def test_9_unreadable_directory(self):
		keep = {self.__touch('a.txt'), self.__touch('open/c.txt')}
		self.__touch('locked/b.txt')
		locked = self.source_root / 'locked'
		locked.chmod(0)
		try:
			self.assertEqual(keep, self.__scan())
		finally:
			locked.chmod(0o755)

	def test_10_unreadable_entry(self):
		keep = self.__touch('a.txt')

		class BrokenEntry:
			name = 'broken'

			def is_dir(self, *, follow_symlinks: bool = True) -> bool:
				raise PermissionError('denied')

			def is_file(self, *, follow_symlinks: bool = True) -> bool:
				raise PermissionError('denied')

		real_scandir = os.scandir

		@contextlib.contextmanager
		def scandir_with_broken_entry(path):
			with real_scandir(path) as it:
				yield [BrokenEntry(), *it]

		with mock.patch('os.scandir', scandir_with_broken_entry):
			self.assertEqual({keep}, self.__scan())

	@unittest.skipUnless(hasattr(os, 'mkfifo'), 'fifo is not supported')
	def test_11_special_files(self):
		keep = self.__touch('a.txt')
		os.mkfifo(self.source_root / 'pipe')
		(self.source_root / 'sub').mkdir()
		os.mkfifo(self.source_root / 'sub' / 'pipe.txt')
		self.assertEqual({keep}, self.__scan())

	def test_12_source_root_in_blacklisted_directory(self):
		source_root = self.root / 'dist' / 'source'
		source_root.mkdir(parents=True)
		(source_root / 'a.txt').write_bytes(b'x')

		with mock.patch.object(logger.get(), 'warning') as warning:
			result = ScanCandidatesAction(source_root, HashLedger()).run()
		self.assertEqual([], result)
		warning.assert_called_once()
		self.assertIn('blacklisted', warning.call_args[0][0])

		with mock.patch.object(logger.get(), 'warning') as warning:
			ScanCandidatesAction(self.source_root, HashLedger()).run()
		warning.assert_not_called()


if __name__ == '__main__':
	unittest.main()
