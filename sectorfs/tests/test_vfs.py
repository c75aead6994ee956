"""
Unit tests for the virtual file operations.

Run with: python -m pytest sectorfs/tests -v
"""

import tempfile
import threading
import unittest
from pathlib import Path

from sectorfs.core.config_loader import Config
from sectorfs.exceptions import (
    CannotOpenFile,
    CannotOpenIndex,
    FileAlreadyExists,
    FileNotFound,
    InvalidPathError,
)
from sectorfs.filesystem.allocator import AllocationPolicy, SectorAllocator
from sectorfs.filesystem.index_store import IndexRecord, SectorId
from sectorfs.filesystem.medium import SectorMedium
from sectorfs.filesystem.vfs import VfsService


class VfsTestCase(unittest.TestCase):
    """Fresh medium with an empty index for every test."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.vfs = VfsService(SectorMedium(self.root))
        self.vfs.store.initialize()

    def tearDown(self):
        self._tmp.cleanup()

    def index_text(self) -> str:
        return (self.root / 'index.txt').read_text()


class TestLookups(VfsTestCase):
    """Test sector_of, exists and is_directory."""

    def test_sector_of_absent(self):
        self.assertIsNone(self.vfs.sector_of('/nothing'))

    def test_sector_of_normalizes(self):
        self.vfs.create('/a.txt')
        self.assertEqual(self.vfs.sector_of('a.txt'), SectorId(0))
        self.assertEqual(self.vfs.sector_of('/a.txt'), SectorId(0))

    def test_exists(self):
        self.assertFalse(self.vfs.exists('/f'))
        self.vfs.create('f')
        self.assertTrue(self.vfs.exists('/f'))
        self.assertTrue(self.vfs.exists('f'))

    def test_exists_is_exact(self):
        self.vfs.create('/dir/file')
        self.assertFalse(self.vfs.exists('/dir'))
        self.assertFalse(self.vfs.exists('/dir/'))

    def test_is_directory_is_syntactic(self):
        self.assertTrue(self.vfs.is_directory('/missing/'))
        self.vfs.create('/dir/file')
        self.assertFalse(self.vfs.is_directory('/dir'))

    def test_lookups_require_index(self):
        (self.root / 'index.txt').unlink()
        with self.assertRaises(CannotOpenIndex):
            self.vfs.exists('/f')
        with self.assertRaises(CannotOpenIndex):
            self.vfs.sector_of('/f')
        with self.assertRaises(CannotOpenIndex):
            self.vfs.list('/')


class TestCreate(VfsTestCase):
    """Test file creation."""

    def test_create_appends_record_and_empty_sector(self):
        sector_id = self.vfs.create('/logs/run.txt')

        self.assertEqual(sector_id, SectorId(0))
        self.assertEqual(self.index_text(), '/logs/run.txt/0\n')
        self.assertEqual((self.root / '0').read_text(), '')

    def test_sequential_ids(self):
        ids = [self.vfs.create(f'/f{i}') for i in range(4)]
        self.assertEqual([str(i) for i in ids], ['0', '1', '2', '3'])

    def test_create_then_exists(self):
        for path in ('/x', 'y', '/d/e/f.txt'):
            self.vfs.create(path)
            self.assertTrue(self.vfs.exists(path))

    def test_overwrite_recreates(self):
        self.vfs.create('/a')
        self.vfs.create('/b')
        self.vfs.write('/a', 'old')

        sector_id = self.vfs.create('/a')

        self.assertEqual(self.vfs.read('/a'), '')
        self.assertEqual(self.index_text(), '/b/1\n/a/0\n')
        self.assertEqual(sector_id, SectorId(0))

    def test_no_overwrite_leaves_state(self):
        self.vfs.write('/a', 'keep')
        before = self.index_text()

        with self.assertRaises(FileAlreadyExists) as ctx:
            self.vfs.create('/a', overwrite=False)

        self.assertEqual(ctx.exception.path, '/a')
        self.assertEqual(self.index_text(), before)
        self.assertEqual(self.vfs.read('/a'), 'keep\n')

    def test_create_unappendable_index(self):
        (self.root / 'index.txt').unlink()
        (self.root / 'index.txt').mkdir()
        with self.assertRaises(CannotOpenIndex):
            self.vfs.create('/a')

    def test_create_sector_unopenable(self):
        (self.root / '0').mkdir()
        with self.assertRaises(CannotOpenFile):
            self.vfs.create('/a')

        self.assertFalse(self.vfs.exists('/a'))
        self.assertEqual(self.index_text(), '')

    def test_carriage_return_in_path(self):
        self.vfs.create('/a\rb')
        self.assertFalse(self.vfs.exists('/other'))
        self.assertTrue(self.vfs.exists('/a\rb'))
        self.assertEqual(self.vfs.create('/c'), SectorId(1))

    def test_unstorable_path_rejected(self):
        self.vfs.create('/a')
        for path in ('/x\ny', '/x\r\n', '/bad\udcff'):
            with self.assertRaises(InvalidPathError, msg=repr(path)):
                self.vfs.create(path)
        with self.assertRaises(InvalidPathError):
            self.vfs.write('/x\ny', 'data')
        self.assertEqual(self.index_text(), '/a/0\n')

    def test_distinct_ids_without_deletes(self):
        ids = {self.vfs.create(f'/dir{i % 3}/f{i}') for i in range(20)}
        self.assertEqual(len(ids), 20)


class TestDelete(VfsTestCase):
    """Test file deletion."""

    def test_delete_missing(self):
        with self.assertRaises(FileNotFound):
            self.vfs.delete('/nope')

    def test_delete_then_absent(self):
        self.vfs.write('/f', 'data')
        self.vfs.delete('f')

        self.assertFalse(self.vfs.exists('/f'))
        with self.assertRaises(FileNotFound):
            self.vfs.read('/f')

    def test_sector_emptied_not_removed(self):
        self.vfs.write('/f', 'data')
        self.vfs.delete('/f')

        self.assertTrue((self.root / '0').exists())
        self.assertEqual((self.root / '0').read_text(), '')

    def test_survivor_order_preserved(self):
        for name in ('/a', '/b', '/c', '/d'):
            self.vfs.create(name)

        self.vfs.delete('/b')

        self.assertEqual(self.index_text(), '/a/0\n/c/2\n/d/3\n')

    def test_delete_drops_duplicate_records(self):
        self.vfs.store.append(IndexRecord('/dup', SectorId(0)))
        self.vfs.store.append(IndexRecord('/other', SectorId(1)))
        self.vfs.store.append(IndexRecord('/dup', SectorId(2)))

        self.vfs.delete('/dup')

        self.assertEqual(self.index_text(), '/other/1\n')


class TestReadWrite(VfsTestCase):
    """Test file content I/O."""

    def test_write_creates(self):
        sector_id = self.vfs.write('/new.txt', 'hello')
        self.assertEqual(sector_id, SectorId(0))
        self.assertTrue(self.vfs.exists('/new.txt'))

    def test_write_existing_keeps_sector(self):
        self.vfs.create('/a')
        self.vfs.create('/b')
        self.assertEqual(self.vfs.write('/b', 'x'), SectorId(1))
        self.assertEqual(self.index_text(), '/a/0\n/b/1\n')

    def test_round_trip_adds_final_newline(self):
        self.vfs.write('/f', 'one\ntwo')
        self.assertEqual(self.vfs.read('/f'), 'one\ntwo\n')

    def test_round_trip_with_final_newline(self):
        self.vfs.write('/f', 'one\ntwo\n')
        self.assertEqual(self.vfs.read('/f'), 'one\ntwo\n')

    def test_crlf_input_normalized(self):
        self.vfs.write('/f', 'one\r\ntwo\r\n')
        self.assertEqual((self.root / '0').read_text(), 'one\ntwo\n')
        self.assertEqual(self.vfs.read('/f'), 'one\ntwo\n')

    def test_empty_lines_kept(self):
        self.vfs.write('/f', 'a\n\nb')
        self.assertEqual(self.vfs.read('/f'), 'a\n\nb\n')

    def test_empty_data(self):
        self.vfs.write('/f', '')
        self.assertEqual(self.vfs.read('/f'), '')

    def test_overwrite_replaces_content(self):
        self.vfs.write('/f', 'first\nsecond\nthird')
        self.vfs.write('/f', 'only')
        self.assertEqual(self.vfs.read('/f'), 'only\n')

    def test_read_missing(self):
        with self.assertRaises(FileNotFound):
            self.vfs.read('/missing')

    def test_read_unopenable_sector(self):
        self.vfs.store.append(IndexRecord('/f', SectorId(4)))
        (self.root / '4').mkdir()
        with self.assertRaises(CannotOpenFile):
            self.vfs.read('/f')

    def test_read_sector_missing_on_disk(self):
        self.vfs.store.append(IndexRecord('/f', SectorId(9)))
        with self.assertRaises(CannotOpenFile):
            self.vfs.read('/f')

    def test_bare_carriage_return_kept(self):
        self.vfs.write('/f', 'a\rb\nc')
        self.assertEqual(self.vfs.read('/f'), 'a\rb\nc\n')

    def test_read_invalid_utf8(self):
        self.vfs.create('/f')
        (self.root / '0').write_bytes(b'\xff\xfe\n')
        with self.assertRaises(CannotOpenFile) as ctx:
            self.vfs.read('/f')
        self.assertEqual(ctx.exception.mode, 'decode')

    def test_crlf_medium(self):
        vfs = VfsService(SectorMedium(self.root, line_terminator='\r\n'))
        vfs.write('/f', 'a\nb')
        self.assertEqual((self.root / '0').read_bytes(), b'a\r\nb\r\n')
        self.assertEqual(vfs.read('/f'), 'a\nb\n')


class TestList(VfsTestCase):
    """Test directory listing."""

    def setUp(self):
        super().setUp()
        for path in ('/a/x.txt', '/a/b/y.txt', '/a/b/z.txt'):
            self.vfs.create(path)

    def test_non_recursive_collapses(self):
        self.assertEqual(self.vfs.list('/a/'), ['x.txt', 'b/'])

    def test_recursive(self):
        self.assertEqual(self.vfs.list('/a/', recursive=True), ['x.txt', 'b/y.txt', 'b/z.txt'])

    def test_root(self):
        self.assertEqual(self.vfs.list('/'), ['a/'])

    def test_normalizes_directory(self):
        self.assertEqual(self.vfs.list('a/'), ['x.txt', 'b/'])

    def test_substring_match(self):
        self.vfs.create('/other/a/w.txt')
        self.assertEqual(self.vfs.list('/a/'), ['x.txt', 'b/', 'w.txt'])

    def test_without_trailing_slash(self):
        self.assertEqual(self.vfs.list('/a/b'), ['/'])

    def test_no_match(self):
        self.assertEqual(self.vfs.list('/zzz/'), [])


class TestScenarios(VfsTestCase):
    """End-to-end allocation scenarios."""

    def test_deleted_sector_reused(self):
        self.assertEqual(str(self.vfs.create('/f')), '0')
        self.assertEqual(str(self.vfs.create('/g')), '1')
        self.vfs.delete('/f')
        self.assertEqual(str(self.vfs.create('/h')), '0')

    def test_scan_collision_after_reorder(self):
        self.vfs.create('/a')
        self.vfs.create('/b')
        self.vfs.delete('/a')
        self.vfs.create('/c')  # index is now b/1, c/0

        # The single pass misses that 1 is still taken
        self.assertEqual(self.vfs.create('/d'), SectorId(1))

    def test_first_gap_avoids_collision(self):
        vfs = VfsService(
            SectorMedium(self.root),
            allocator=SectorAllocator(AllocationPolicy.FIRST_GAP)
        )
        vfs.create('/a')
        vfs.create('/b')
        vfs.delete('/a')
        vfs.create('/c')
        self.assertEqual(vfs.create('/d'), SectorId(2))

    def test_shared_instance_across_threads(self):
        errors = []

        def worker(n):
            try:
                for i in range(10):
                    self.vfs.create(f'/t{n}/f{i}')
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(errors, [])
        ids = [record.sector_id for record in self.vfs.store.load()]
        self.assertEqual(len(ids), 40)
        self.assertEqual(len(set(ids)), 40)


class TestFromConfig(unittest.TestCase):
    """Test building the service from configuration."""

    def test_from_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            config = Config()
            config.storage.root_path = tmp
            config.storage.index_file = 'files.idx'
            config.storage.allocation_policy = 'first_gap'

            vfs = VfsService.from_config(config)
            vfs.store.initialize()
            vfs.write('/a', 'x')

            self.assertTrue((Path(tmp) / 'files.idx').exists())
            stats = vfs.get_stats()
            self.assertEqual(stats['files'], 1)
            self.assertEqual(stats['highest_sector'], '0')
            self.assertEqual(stats['allocation_policy'], 'first_gap')


if __name__ == '__main__':
    unittest.main()
