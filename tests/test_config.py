import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from mirror_backup.compressors import CompressMethod
from mirror_backup.config.backup_config import BackupConfig
from mirror_backup.config.config import Config, set_config_instance
from mirror_backup.exceptions import ConfigError, MissingConfigPath
from mirror_backup.types.hash_method import HashMethod


class ConfigTestCase(unittest.TestCase):
	def setUp(self):
		self.temp_dir = tempfile.TemporaryDirectory()
		self.root = Path(self.temp_dir.name)

	def tearDown(self):
		set_config_instance(None)
		self.temp_dir.cleanup()

	def test_1_defaults(self):
		config = Config.get_default()
		self.assertFalse(config.debug)
		self.assertIsNone(config.hash_file)
		self.assertEqual(['node_modules', 'target', 'dist', '.git'], config.backup.blacklist_dirs)
		self.assertEqual(['exe', 'dll', 'obj'], config.backup.blacklist_extensions)
		self.assertEqual(CompressMethod.zstd, config.backup.compress_method)
		self.assertEqual(HashMethod.blake3, config.backup.hash_method)

		with self.assertRaises(MissingConfigPath):
			_ = config.source_root
		with self.assertRaises(MissingConfigPath):
			_ = config.destination_root

	def test_2_save_load(self):
		config = Config.get_default()
		config.source_path = 'src'
		config.destination_path = str(self.root / 'dst')
		config.hash_file_path = 'hashes.json'
		config.concurrency = 3
		config.backup.add_blacklist_items(['.log', 'build'])

		path = self.root / 'sub' / 'config.json'
		config.save_to_file(path)
		loaded = Config.load_from_file(path)
		self.assertEqual(config.serialize(), loaded.serialize())
		self.assertEqual(Path('src').absolute(), loaded.source_root)
		self.assertTrue(loaded.source_root.is_absolute())
		self.assertEqual(Path('hashes.json'), loaded.hash_file)
		self.assertIn('log', loaded.backup.blacklist_extensions)
		self.assertIn('build', loaded.backup.blacklist_dirs)

	def test_3_load_errors(self):
		with self.assertRaises(FileNotFoundError):
			Config.load_from_file(self.root / 'missing.json')

		cases = {
			'malformed': '{"source_path": ',
			'not_object': '[1, 2]',
			'bad_type': json.dumps({'concurrency': 'many'}),
		}
		for name, content in cases.items():
			with self.subTest(name=name):
				path = self.root / (name + '.json')
				path.write_text(content, encoding='utf8')
				with self.assertRaises(ConfigError):
					Config.load_from_file(path)

	def test_4_partial_file(self):
		path = self.root / 'config.json'
		path.write_text(json.dumps({'source_path': '/data', 'backup': {'compress_method': 'lz4'}}), encoding='utf8')
		config = Config.load_from_file(path)
		self.assertEqual('/data', config.source_path)
		self.assertEqual(CompressMethod.lz4, config.backup.compress_method)
		self.assertEqual(HashMethod.blake3, config.backup.hash_method)
		self.assertEqual(0, config.concurrency)

	def test_5_effective_concurrency(self):
		self.assertEqual(4, Config.deserialize({'concurrency': 4}).get_effective_concurrency())
		with mock.patch('multiprocessing.cpu_count', return_value=6):
			self.assertEqual(6, Config.deserialize({'concurrency': 0}).get_effective_concurrency())
			self.assertEqual(6, Config.deserialize({'concurrency': -1}).get_effective_concurrency())

	def test_6_config_instance(self):
		config = Config.deserialize({'source_path': 'x'})
		set_config_instance(config)
		self.assertIs(config, Config.get())
		set_config_instance(None)
		self.assertIsNone(Config.get().source_path)

	def test_7_add_blacklist_items(self):
		backup = BackupConfig.get_default()
		backup.add_blacklist_items(['.log', '..tmp', 'build', 'dist', '.exe', '.cache/'])
		self.assertEqual(['exe', 'dll', 'obj', 'log', 'tmp', 'cache/'], backup.blacklist_extensions)
		self.assertEqual(['node_modules', 'target', 'dist', '.git', 'build'], backup.blacklist_dirs)

		# class defaults stay untouched
		self.assertEqual(['exe', 'dll', 'obj'], BackupConfig.get_default().blacklist_extensions)

		path_filter = backup.create_path_filter()
		self.assertTrue(path_filter.is_excluded('/a/b.log'))
		self.assertTrue(path_filter.is_excluded('/a/build/c.txt'))
		self.assertFalse(path_filter.is_excluded('/a/c.txt'))


if __name__ == '__main__':
	unittest.main()
