import pytest

from app.core.exceptions import DuplicateRecordError, EntityNotFoundError, ValidationError
from app.repositories.master_data_repo import MasterDataRepository, MasterKind
from app.services.freelancer_service import FreelancerService
from app.services.master_data_service import MasterDataService


async def test_create_and_get_master(db):
    service = MasterDataService(db, MasterKind.SKILLSET)

    created = await service.create_master("  Python ")
    loaded = await service.get_master(created.id)

    assert loaded.name == "Python"


async def test_create_duplicate_name_is_case_insensitive(db):
    service = MasterDataService(db, MasterKind.HOBBY)
    await service.create_master("Chess")

    with pytest.raises(DuplicateRecordError) as exc_info:
        await service.create_master("CHESS")
    assert exc_info.value.entity == "Hobby"


@pytest.mark.parametrize("name", ["", "   ", "x" * 101])
async def test_create_rejects_invalid_names(db, name):
    with pytest.raises(ValidationError):
        await MasterDataService(db, MasterKind.SKILLSET).create_master(name)


async def test_rename_master(db):
    service = MasterDataService(db, MasterKind.SKILLSET)
    go = await service.create_master("go")

    renamed = await service.rename_master(go.id, "Go")

    assert renamed.id == go.id
    assert renamed.name == "Go"


async def test_rename_to_existing_name_is_rejected(db):
    service = MasterDataService(db, MasterKind.SKILLSET)
    await service.create_master("Go")
    rust = await service.create_master("Rust")

    with pytest.raises(DuplicateRecordError):
        await service.rename_master(rust.id, "go")


async def test_rename_or_delete_missing_master_is_not_found(db):
    service = MasterDataService(db, MasterKind.HOBBY)

    with pytest.raises(EntityNotFoundError):
        await service.rename_master("missing", "Chess")
    with pytest.raises(EntityNotFoundError):
        await service.delete_master("missing")


async def test_delete_master_detaches_it_from_freelancers(db, create_freelancer):
    alice = await create_freelancer("alice", skillsets=["C#", "SQL"])
    csharp = next(s for s in alice.skillsets if s.name == "C#")

    await MasterDataService(db, MasterKind.SKILLSET).delete_master(csharp.id)

    reloaded = await FreelancerService(db).get_freelancer(alice.id)
    assert [s.name for s in reloaded.skillsets] == ["SQL"]


async def test_query_master_sorted_and_paged(db):
    service = MasterDataService(db, MasterKind.SKILLSET)
    for name in ["Rust", "C#", "Go", "Python", "Golang"]:
        await service.create_master(name)

    first = await service.query_master(page=1, page_size=2)
    assert [r.name for r in first.items] == ["C#", "Go"]
    assert first.total_count == 5
    assert first.total_pages == 3

    filtered = await service.query_master(term="GO")
    assert [r.name for r in filtered.items] == ["Go", "Golang"]
    assert filtered.total_count == 2


async def test_create_duplicate_non_ascii_name_is_rejected(db):
    service = MasterDataService(db, MasterKind.SKILLSET)
    await service.create_master("Äpfel")

    with pytest.raises(DuplicateRecordError):
        await service.create_master("Äpfel")

    filtered = await service.query_master(term="Äpf")
    assert [r.name for r in filtered.items] == ["Äpfel"]


async def test_unique_index_rejects_create_missed_by_lookup(db, monkeypatch):
    async def _no_match(self, name, exclude_id=None):
        return None

    service = MasterDataService(db, MasterKind.HOBBY)
    await service.create_master("Chess")
    monkeypatch.setattr(MasterDataRepository, "get_by_name", _no_match)

    with pytest.raises(DuplicateRecordError) as exc_info:
        await service.create_master("CHESS")
    assert exc_info.value.key == "CHESS"

    # the session is still usable after the rollback
    result = await service.query_master()
    assert [r.name for r in result.items] == ["Chess"]
