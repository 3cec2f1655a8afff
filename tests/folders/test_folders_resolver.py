import threading
import unittest
from collections import Counter

from drivelink.errors import (
    FolderCreationError,
    InvalidArgumentError,
    NetworkError,
    UnauthenticatedError,
)
from drivelink.folders import FolderResolver
from drivelink.items import ItemOperations

from fake_graph import FakeGraph


def _resolver(fake: FakeGraph, token="token") -> FolderResolver:
    transport = fake.make_transport(token)
    return FolderResolver(transport, ItemOperations(transport))


class TestFolderResolver(unittest.TestCase):
    def setUp(self) -> None:
        self.fake = FakeGraph()
        self.root_id = self.fake.add_folder_path("/Root")
        self.clients_id = self.fake.add_folder_path("/Root/Clients")
        self.fake.creations.clear()
        self.resolver = _resolver(self.fake)

    def test_root_path_needs_no_remote_call(self) -> None:
        for path in ("", "/", "//"):
            item = self.resolver.resolve(path)
            self.assertEqual(item.id, "root")
        self.assertEqual(self.fake.calls, [])

    def test_direct_create_when_parent_exists(self) -> None:
        item = self.resolver.resolve("/Root/Clients/Dupont")
        self.assertTrue(item.is_folder)
        self.assertEqual(item.parent_id, self.clients_id)
        self.assertEqual(self.fake.calls, [("PUT", "/root:/Root/Clients/Dupont")])
        self.assertEqual(self.fake.creations, [("Dupont", self.clients_id)])

    def test_direct_create_uses_rename_policy(self) -> None:
        self.resolver.resolve("/Root/Clients/Dupont")
        body = self.fake.requests[-1].content
        self.assertIn(b'"@microsoft.graph.conflictBehavior": "rename"', body)

    def test_conflict_converges_on_existing_folder(self) -> None:
        self.fake.queue("PUT", "/root:/Root/Other", 409, json_body={"error": {"code": "nameAlreadyExists"}})
        self.fake.queue(
            "GET",
            "/root:/Root/Other",
            200,
            json_body={"id": "X9", "name": "Other", "folder": {"childCount": 0}},
        )
        item = self.resolver.resolve("/Root/Other")
        self.assertEqual(item.id, "X9")
        self.assertEqual(
            self.fake.calls, [("PUT", "/root:/Root/Other"), ("GET", "/root:/Root/Other")]
        )

    def test_missing_intermediate_segments_are_created_in_order(self) -> None:
        item = self.resolver.resolve("/Root/Clients/Dupont/Case-001")

        self.assertEqual(item.name, "Case-001")
        self.assertEqual(len(self.fake.creations), 2)
        (first_name, first_parent), (second_name, second_parent) = self.fake.creations
        self.assertEqual((first_name, first_parent), ("Dupont", self.clients_id))
        dupont_id = self.fake.render(item.id)["parentReference"]["id"]
        self.assertEqual((second_name, second_parent), ("Case-001", dupont_id))

        posts = self.fake.calls_to("POST")
        self.assertEqual(posts, [f"/items/{self.clients_id}/children", f"/items/{dupont_id}/children"])
        # Segment creation must not silently rename.
        for request in self.fake.requests:
            if request.method == "POST":
                self.assertIn(b'"@microsoft.graph.conflictBehavior": "fail"', request.content)
        # Final snapshot fetched by id.
        self.assertEqual(self.fake.calls[-1], ("GET", f"/items/{item.id}"))

    def test_walk_from_drive_root(self) -> None:
        item = self.resolver.resolve("/New/Sub")
        self.assertEqual([name for name, _ in self.fake.creations], ["New", "Sub"])
        self.assertEqual(self.fake.creations[0][1], "root")
        self.assertIn("/root/children", self.fake.calls_to("POST"))
        self.assertTrue(item.is_folder)

    def test_sequential_resolution_is_idempotent(self) -> None:
        first = self.resolver.resolve("/Root/Clients/Dupont/Case-001")
        second = self.resolver.resolve("/Root/Clients/Dupont/Case-001")
        self.assertEqual(first.id, second.id)
        counts = Counter(name for name, _ in self.fake.creations)
        self.assertEqual(counts, Counter({"Dupont": 1, "Case-001": 1}))

    def test_concurrent_resolution_creates_one_folder_per_segment(self) -> None:
        barrier = threading.Barrier(4)
        results: list[str] = []
        errors: list[BaseException] = []

        def worker() -> None:
            resolver = _resolver(self.fake)
            barrier.wait()
            try:
                results.append(resolver.resolve("/Root/Clients/Martin/Case-002").id)
            except BaseException as exc:  # surfaced by the assertion below
                errors.append(exc)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        self.assertEqual(errors, [])
        self.assertEqual(len(results), 4)
        self.assertEqual(len(set(results)), 1)
        counts = Counter(name for name, _ in self.fake.creations)
        self.assertEqual(counts, Counter({"Martin": 1, "Case-002": 1}))

    def test_segment_created_concurrently_is_reused(self) -> None:
        existing = self.fake.add_folder(self.clients_id, "Dupont")
        self.fake.creations.clear()
        # Direct attempt fails, and the existence check misses the folder a
        # concurrent caller just created.
        self.fake.queue("PUT", "/root:/Root/Clients/Dupont", 503, content=b"busy")
        self.fake.queue("GET", "/root:/Root/Clients/Dupont", 404, json_body={"error": {}})

        item = self.resolver.resolve("/Root/Clients/Dupont")

        self.assertEqual(item.id, existing)
        self.assertEqual(self.fake.creations, [])

    def test_segment_creation_failure_names_segment(self) -> None:
        self.fake.queue(
            "POST",
            f"/items/{self.clients_id}/children",
            403,
            json_body={"error": {"code": "accessDenied", "message": "no"}},
        )
        with self.assertRaises(FolderCreationError) as ctx:
            self.resolver.resolve("/Root/Clients/Dupont/Case-001")
        err = ctx.exception
        self.assertIn("Dupont", str(err))
        self.assertEqual(err.details["segment"], "Dupont")
        self.assertEqual(err.details["status_code"], 403)
        # Aborted: Case-001 never attempted.
        self.assertEqual(len(self.fake.calls_to("POST")), 1)

    def test_existence_check_failure_aborts(self) -> None:
        self.fake.queue("PUT", "/root:/Root/Clients/Dupont/Case-001", 404, json_body={"error": {}})
        self.fake.queue("GET", "/root:/Root", 500, content=b"down")
        with self.assertRaises(FolderCreationError) as ctx:
            self.resolver.resolve("/Root/Clients/Dupont/Case-001")
        self.assertEqual(ctx.exception.details["segment"], "Root")
        self.assertEqual(self.fake.calls_to("POST"), [])

    def test_network_failure_during_walk_names_segment(self) -> None:
        self.fake.network_failures.add(("GET", "/root:/Root/Clients/Dupont"))
        with self.assertRaises(FolderCreationError) as ctx:
            self.resolver.resolve("/Root/Clients/Dupont/Case-001")
        err = ctx.exception
        self.assertIn("Dupont", str(err))
        self.assertEqual(err.details["segment"], "Dupont")
        self.assertEqual(err.details["remote_kind"], "network")
        self.assertIsInstance(err.cause, NetworkError)
        self.assertEqual(self.fake.calls_to("POST"), [])

    def test_file_in_path_is_an_error(self) -> None:
        self.fake.add_file(self.clients_id, "notes", b"x")
        with self.assertRaises(FolderCreationError):
            self.resolver.resolve("/Root/Clients/notes/Case-001")

    def test_unauthenticated_makes_no_calls(self) -> None:
        resolver = _resolver(self.fake, token=None)
        with self.assertRaises(UnauthenticatedError):
            resolver.resolve("/Root/Clients/Dupont")
        self.assertEqual(self.fake.calls, [])


class TestGetOrCreateChild(unittest.TestCase):
    def setUp(self) -> None:
        self.fake = FakeGraph()
        self.resolver = _resolver(self.fake)

    def test_reuses_case_insensitive_match(self) -> None:
        existing = self.fake.add_folder("root", "Portail Cabinet")
        self.fake.creations.clear()
        item = self.resolver.get_or_create_child(None, "portail cabinet")
        self.assertEqual(item.id, existing)
        self.assertEqual(self.fake.creations, [])

    def test_creates_when_absent(self) -> None:
        parent = self.fake.add_folder("root", "Clients")
        item = self.resolver.get_or_create_child(parent, "Dupont")
        self.assertEqual(item.parent_id, parent)
        self.assertIn(("Dupont", parent), self.fake.creations)

    def test_files_with_same_name_are_not_reused(self) -> None:
        self.fake.add_file("root", "Archive", b"x")
        item = self.resolver.get_or_create_child(None, "Archive")
        self.assertTrue(item.is_folder)
        self.assertEqual(item.name, "Archive 1")

    def test_rejects_bad_names(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            self.resolver.get_or_create_child(None, "a/b")
        with self.assertRaises(InvalidArgumentError):
            self.resolver.get_or_create_child(None, "")


if __name__ == "__main__":
    unittest.main()
