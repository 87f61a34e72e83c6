import unittest

from offline_cache.errors import InstallError, InvalidTransition, NetworkError
from offline_cache.models import CachedResponse, CacheRequest
from offline_cache.storage import InMemoryCacheStorage
from offline_cache.tests.fakes import ORIGIN, FakeFetcher, offline, page
from offline_cache.worker import OfflineCacheWorker, WorkerPhase

PRECACHE = ("/", "/index.html", "/css/custom.css")


def _routes():
    return {
        f"{ORIGIN}/": page(f"{ORIGIN}/"),
        f"{ORIGIN}/index.html": page(f"{ORIGIN}/index.html"),
        f"{ORIGIN}/css/custom.css": page(f"{ORIGIN}/css/custom.css", b"body{}"),
    }


class WorkerInstallTests(unittest.TestCase):
    def setUp(self):
        self.storage = InMemoryCacheStorage()
        self.fetcher = FakeFetcher(routes=_routes())

    def test_install_precaches_every_url(self):
        worker = OfflineCacheWorker("site-v1", PRECACHE, self.storage, self.fetcher)
        worker.install()

        self.assertEqual(worker.phase, WorkerPhase.INSTALLED)
        cached = {req.url for req in self.storage.open("site-v1").keys()}
        self.assertEqual(
            cached,
            {f"{ORIGIN}/", f"{ORIGIN}/index.html", f"{ORIGIN}/css/custom.css"},
        )

    def test_single_network_failure_aborts_whole_batch(self):
        self.fetcher.routes[f"{ORIGIN}/css/custom.css"] = offline("custom.css")
        worker = OfflineCacheWorker("site-v1", PRECACHE, self.storage, self.fetcher)

        with self.assertRaises(InstallError):
            worker.install()

        self.assertEqual(worker.phase, WorkerPhase.REDUNDANT)
        self.assertFalse(self.storage.has("site-v1"))

    def test_non_ok_status_aborts_install(self):
        self.fetcher.routes[f"{ORIGIN}/index.html"] = page(
            f"{ORIGIN}/index.html", status=500
        )
        worker = OfflineCacheWorker("site-v1", PRECACHE, self.storage, self.fetcher)

        with self.assertRaises(InstallError) as ctx:
            worker.install()
        self.assertEqual(ctx.exception.url, f"{ORIGIN}/index.html")
        self.assertEqual(self.storage.keys(), [])

    def test_install_twice_is_rejected(self):
        worker = OfflineCacheWorker("site-v1", PRECACHE, self.storage, self.fetcher)
        worker.install()
        with self.assertRaises(InvalidTransition):
            worker.install()

    def test_activate_before_install_is_rejected(self):
        worker = OfflineCacheWorker("site-v1", PRECACHE, self.storage, self.fetcher)
        with self.assertRaises(InvalidTransition):
            worker.activate()
        self.assertEqual(worker.phase, WorkerPhase.PARSED)


class WorkerActivateTests(unittest.TestCase):
    def test_activate_leaves_only_current_generation(self):
        storage = InMemoryCacheStorage()
        storage.open("site-v0").put(
            CacheRequest(f"{ORIGIN}/old.css"), page(f"{ORIGIN}/old.css")
        )
        storage.open("unrelated-cache")
        worker = OfflineCacheWorker(
            "site-v1", PRECACHE, storage, FakeFetcher(routes=_routes())
        )
        worker.install()

        purged = worker.activate()

        self.assertEqual(sorted(purged), ["site-v0", "unrelated-cache"])
        self.assertEqual(storage.keys(), ["site-v1"])
        self.assertEqual(worker.phase, WorkerPhase.ACTIVATED)


class WorkerFetchTests(unittest.TestCase):
    def setUp(self):
        self.storage = InMemoryCacheStorage()
        self.fetcher = FakeFetcher(routes=_routes())
        self.worker = OfflineCacheWorker("site-v1", PRECACHE, self.storage, self.fetcher)
        self.worker.install()
        self.worker.activate()
        self.fetcher.calls.clear()

    def test_cache_hit_skips_network(self):
        response = self.worker.handle_fetch(CacheRequest(f"{ORIGIN}/index.html"))
        self.assertEqual(response.status, 200)
        self.assertEqual(self.fetcher.calls, [])

    def test_miss_is_written_through(self):
        url = f"{ORIGIN}/images/proj_1.jpg"
        self.fetcher.routes[url] = page(url, b"\x89PNG")

        first = self.worker.handle_fetch(CacheRequest(url))
        second = self.worker.handle_fetch(CacheRequest(url))

        self.assertEqual(first.body, b"\x89PNG")
        self.assertEqual(second.body, b"\x89PNG")
        self.assertEqual(len(self.fetcher.calls), 1)

    def test_cross_origin_responses_are_not_cached(self):
        cors_url = "https://cdn.example/lib.js"
        opaque_url = "https://tracker.example/pixel.gif"
        self.fetcher.routes[cors_url] = CachedResponse(
            url=cors_url, status=200, body=b"js", type="cors"
        )
        self.fetcher.routes[opaque_url] = CachedResponse(
            url=opaque_url, status=0, type="opaque"
        )

        for url in (cors_url, opaque_url, cors_url, opaque_url):
            self.worker.handle_fetch(CacheRequest(url))

        self.assertEqual(len(self.fetcher.calls), 4)
        cached = {req.url for req in self.storage.open("site-v1").keys()}
        self.assertNotIn(cors_url, cached)
        self.assertNotIn(opaque_url, cached)

    def test_non_200_passes_through_uncached(self):
        url = f"{ORIGIN}/missing.html"
        response = self.worker.handle_fetch(CacheRequest(url))
        self.assertEqual(response.status, 404)
        self.worker.handle_fetch(CacheRequest(url))
        self.assertEqual(len(self.fetcher.calls), 2)

    def test_network_failure_propagates_unmodified(self):
        url = f"{ORIGIN}/api/portfolio"
        failure = offline(url)
        self.fetcher.routes[url] = failure
        with self.assertRaises(NetworkError) as ctx:
            self.worker.handle_fetch(CacheRequest(url))
        self.assertIs(ctx.exception, failure)

    def test_cache_write_failure_does_not_affect_response(self):
        url = f"{ORIGIN}/api/contact"
        self.fetcher.routes[url] = page(url, b'{"success": true}')

        with self.assertLogs("offline_cache.worker", level="WARNING") as logs:
            response = self.worker.handle_fetch(CacheRequest(url, method="POST"))

        self.assertEqual(response.body, b'{"success": true}')
        self.assertIn("Could not cache POST", logs.output[0])

    def test_method_is_part_of_the_key(self):
        response = self.worker.handle_fetch(
            CacheRequest(f"{ORIGIN}/index.html", method="HEAD")
        )
        self.assertEqual(response.status, 200)
        self.assertEqual(len(self.fetcher.calls), 1)

    def test_not_yet_activated_worker_goes_to_network(self):
        worker = OfflineCacheWorker("site-v2", PRECACHE, self.storage, self.fetcher)
        worker.install()
        worker.handle_fetch(CacheRequest(f"{ORIGIN}/index.html"))
        self.assertEqual(len(self.fetcher.calls), len(PRECACHE) + 1)


if __name__ == "__main__":
    unittest.main()
