"""Concurrency tests for shared searchers and the manager's read/write lock."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed

import pytest

from kdindex.domain import VectorCollection
from kdindex.indexes import EuclideanDistance, IndexManager, KDTreeIndex
from kdindex.utils import RWLock


class TestConcurrentSearch:
    """Test suite for concurrent queries over one built index."""

    @pytest.fixture
    def tree(self, rng):
        """A built kd-tree over random points."""
        tree = KDTreeIndex(VectorCollection(rng.normal(size=(500, 3))))
        tree.build()
        return tree

    def test_shared_searcher_gives_sequential_results(self, tree, rng):
        """Concurrent queries on one searcher match sequential execution."""
        knn_query = tree.get_knn_query(EuclideanDistance())
        queries = rng.normal(size=(40, 3))
        expected = [knn_query.get_knn_for_object(q, 7) for q in queries]

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = {
                executor.submit(knn_query.get_knn_for_object, q, 7): i
                for i, q in enumerate(queries)
            }
            for future in as_completed(futures):
                assert future.result() == expected[futures[future]]

    def test_queries_during_rebuild(self, rng):
        """Queries interleaved with rebuilds always see a complete tree."""
        collection = VectorCollection(rng.normal(size=(300, 2)))
        manager = IndexManager(collection, index_type="kdtree", thread_safe=True)
        manager.build()
        knn_query = manager.get_knn_query(EuclideanDistance())
        expected = knn_query.get_knn_for_object([0.0, 0.0], 5)

        def rebuild():
            for _ in range(5):
                manager.build()

        def search():
            return [knn_query.get_knn_for_object([0.0, 0.0], 5) for _ in range(20)]

        with ThreadPoolExecutor(max_workers=5) as executor:
            rebuild_future = executor.submit(rebuild)
            search_futures = [executor.submit(search) for _ in range(4)]

            rebuild_future.result()
            for future in search_futures:
                assert all(result == expected for result in future.result())


class TestRWLock:
    """Test suite for the reader-writer lock."""

    def test_concurrent_readers(self):
        """Multiple readers hold the lock together."""
        lock = RWLock()
        inside = threading.Barrier(3, timeout=2)
        counted = threading.Barrier(3, timeout=2)

        def reader():
            with lock.read_lock():
                inside.wait()
                count = lock.reader_count
                counted.wait()
                return count

        with ThreadPoolExecutor(max_workers=3) as executor:
            counts = [f.result() for f in [executor.submit(reader) for _ in range(3)]]

        assert all(count == 3 for count in counts)
        assert lock.reader_count == 0

    def test_writer_excludes_readers(self):
        """A reader waits until the writer releases the lock."""
        lock = RWLock()
        events = []

        def writer():
            with lock.write_lock():
                events.append("write-start")
                time.sleep(0.1)
                events.append("write-end")

        def reader():
            with lock.read_lock():
                events.append("read")

        writer_thread = threading.Thread(target=writer)
        writer_thread.start()
        time.sleep(0.02)
        reader_thread = threading.Thread(target=reader)
        reader_thread.start()

        writer_thread.join()
        reader_thread.join()

        assert events == ["write-start", "write-end", "read"]
        assert not lock.writer_active
