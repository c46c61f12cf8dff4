import tempfile
import unittest
from pathlib import Path

import blake3

from mirror_backup.action.transcode_file_action import TranscodeFileAction, get_destination_path
from mirror_backup.compressors import Compressor, CompressMethod
from mirror_backup.config.config import Config, set_config_instance
from mirror_backup.exceptions import FileTranscodeError, SourcePathNotInRoot


class TranscodeFileActionTestCase(unittest.TestCase):
	def setUp(self):
		self.temp_dir = tempfile.TemporaryDirectory()
		self.root = Path(self.temp_dir.name)
		self.source_root = self.root / 'source'
		self.destination_root = self.root / 'destination'
		self.source_root.mkdir()
		set_config_instance(Config.deserialize({}))

	def tearDown(self):
		set_config_instance(None)
		self.temp_dir.cleanup()

	def __dest(self, rel: str) -> Path:
		return get_destination_path(self.source_root / rel, self.source_root, self.destination_root, CompressMethod.zstd)

	def test_1_destination_naming(self):
		self.assertEqual(self.destination_root / 'a.txt.zst', self.__dest('a.txt'))
		self.assertEqual(self.destination_root / 'a.tar.gz.zst', self.__dest('a.tar.gz'))
		self.assertEqual(self.destination_root / 'data..zst', self.__dest('data'))
		self.assertEqual(self.destination_root / '.bashrc..zst', self.__dest('.bashrc'))
		self.assertEqual(self.destination_root / 'sub' / 'dir' / 'x.py.zst', self.__dest('sub/dir/x.py'))
		self.assertEqual(
			self.destination_root / 'a.txt.gz',
			get_destination_path(self.source_root / 'a.txt', self.source_root, self.destination_root, CompressMethod.gzip),
		)

	def test_2_not_in_root(self):
		with self.assertRaises(SourcePathNotInRoot):
			get_destination_path(self.root / 'outside.txt', self.source_root, self.destination_root, CompressMethod.zstd)
		with self.assertRaises(FileTranscodeError):
			TranscodeFileAction(self.root / 'outside.txt', self.source_root, self.destination_root).run()

	def test_3_transcode(self):
		src = self.source_root / 'nested' / 'dirs' / 'hello.txt'
		src.parent.mkdir(parents=True)
		src.write_bytes(b'hello')

		result = TranscodeFileAction(src, self.source_root, self.destination_root).run()
		expected_dest = self.destination_root / 'nested' / 'dirs' / 'hello.txt.zst'
		self.assertEqual(expected_dest, result.destination_path)
		self.assertTrue(expected_dest.is_file())
		self.assertEqual(blake3.blake3(b'hello').hexdigest(), result.hash)
		self.assertEqual(5, result.raw_size)
		self.assertEqual(expected_dest.stat().st_size, result.stored_size)

		restored = self.root / 'restored'
		Compressor.create(CompressMethod.zstd).copy_decompressed(expected_dest, restored)
		self.assertEqual(b'hello', restored.read_bytes())

	def test_4_extensionless(self):
		src = self.source_root / 'data'
		src.write_bytes(b'x')
		result = TranscodeFileAction(src, self.source_root, self.destination_root).run()
		self.assertEqual(self.destination_root / 'data..zst', result.destination_path)
		self.assertTrue(result.destination_path.is_file())

	def test_5_overwrite_existing_artifact(self):
		src = self.source_root / 'a.txt'
		src.write_bytes(b'new content')
		dest = self.destination_root / 'a.txt.zst'
		dest.parent.mkdir(parents=True)
		dest.write_bytes(b'garbage from an interrupted run')

		TranscodeFileAction(src, self.source_root, self.destination_root).run()
		restored = self.root / 'restored'
		Compressor.create(CompressMethod.zstd).copy_decompressed(dest, restored)
		self.assertEqual(b'new content', restored.read_bytes())

	def test_6_missing_source(self):
		with self.assertRaises(FileTranscodeError) as cm:
			TranscodeFileAction(self.source_root / 'missing.txt', self.source_root, self.destination_root).run()
		self.assertIsInstance(cm.exception.cause, FileNotFoundError)

	def test_7_unwritable_destination(self):
		src = self.source_root / 'a.txt'
		src.write_bytes(b'hello')
		(self.destination_root / 'a.txt.zst').mkdir(parents=True)  # a directory occupies the artifact path

		with self.assertRaises(FileTranscodeError) as cm:
			TranscodeFileAction(src, self.source_root, self.destination_root).run()
		self.assertIsInstance(cm.exception.cause, OSError)


if __name__ == '__main__':
	unittest.main()
