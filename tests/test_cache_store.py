from __future__ import annotations

from pathlib import Path

from companies_house.cache_store import FileResultCache, MemoryResultCache


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_memory_cache_expires_entries() -> None:
    clock = FakeClock()
    cache = MemoryResultCache(clock=clock)
    cache.set("company_1", {"company_name": "A"}, 60)

    clock.now += 59
    assert cache.get("company_1") == {"company_name": "A"}

    clock.now += 1
    assert cache.get("company_1") is None
    assert cache.get("missing") is None


def test_memory_cache_overwrites_entries() -> None:
    cache = MemoryResultCache()
    cache.set("k", "first", 60)
    cache.set("k", "second", 60)

    assert cache.get("k") == "second"


def test_file_cache_round_trips_value_kinds(tmp_path: Path) -> None:
    cache = FileResultCache(tmp_path / "data")
    cache.set("company_00000006", {"company_name": "EXAMPLE LTD", "sic": ["62020"]}, 3600)
    cache.set("notes_1", "plain text", 3600)
    cache.set("document_pdf_abc", b"%PDF-1.4\x00\xff", 3600)

    assert cache.get("company_00000006") == {"company_name": "EXAMPLE LTD", "sic": ["62020"]}
    assert cache.get("notes_1") == "plain text"
    assert cache.get("document_pdf_abc") == b"%PDF-1.4\x00\xff"
    assert cache.load_meta("document_pdf_abc")["kind"] == "binary"


def test_file_cache_expires_entries(tmp_path: Path) -> None:
    clock = FakeClock()
    cache = FileResultCache(tmp_path / "data", clock=clock)
    cache.set("k", {"a": 1}, 10)

    clock.now += 10

    assert cache.get("k") is None


def test_file_cache_is_shared_between_instances(tmp_path: Path) -> None:
    FileResultCache(tmp_path / "data").set("search_companies_tesco", {"items": []}, 3600)

    assert FileResultCache(tmp_path / "data").get("search_companies_tesco") == {"items": []}


def test_file_cache_handles_keys_with_separators(tmp_path: Path) -> None:
    cache = FileResultCache(tmp_path / "data")
    cache.set("officer_appointments_a/b/../c", {"ok": True}, 3600)

    assert cache.get("officer_appointments_a/b/../c") == {"ok": True}
    assert all(path.parent == cache.responses_dir for path in cache.responses_dir.iterdir())


def test_file_cache_leaves_no_temp_files(tmp_path: Path) -> None:
    cache = FileResultCache(tmp_path / "data")
    cache.set("k", {"a": 1}, 3600)

    leftovers = list(cache.cache_dir.rglob(".tmp-*"))
    assert leftovers == []


def test_file_cache_reads_corrupt_meta_as_miss(tmp_path: Path) -> None:
    cache = FileResultCache(tmp_path / "data")
    cache.set("company_1", {"company_name": "A"}, 3600)
    cache._meta_path("company_1").write_text('{"key": "compa', encoding="utf-8")

    assert cache.load_meta("company_1") is None
    assert cache.get("company_1") is None


def test_file_cache_reads_corrupt_response_as_miss(tmp_path: Path) -> None:
    cache = FileResultCache(tmp_path / "data")
    cache.set("company_1", {"company_name": "A"}, 3600)
    cache.set("notes_1", "text", 3600)
    cache._response_path("company_1", "json").write_text('{"company_na', encoding="utf-8")
    cache._response_path("notes_1", "text").write_bytes(b"\xff\xfe\xfa")

    assert cache.get("company_1") is None
    assert cache.get("notes_1") is None

    cache.set("company_1", {"company_name": "B"}, 3600)
    assert cache.get("company_1") == {"company_name": "B"}
