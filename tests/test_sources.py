import pytest

from oncall.models import Contact, ContainerRef, ResolutionOutcome
from oncall.pickers import DismissingPicker
from oncall.resolver import NameResolver
from oncall.sources import ContactSourceError, InMemoryContactSource, VCardDirectorySource

WORK_VCF = (
    "BEGIN:VCARD\r\nVERSION:3.0\r\nN:Smith;Jane;;;\r\nFN:Jane Smith\r\nTEL;TYPE=CELL:07700 900001\r\nEND:VCARD\r\n"
    "BEGIN:VCARD\r\nVERSION:3.0\r\nN:Jones;Bill;;;\r\nFN:Bill Jones\r\nTEL;TYPE=WORK:07700 900002\r\nEND:VCARD\r\n"
)

HOME_VCF = "BEGIN:VCARD\r\nVERSION:3.0\r\nN:Smith;Janet;;;\r\nFN:Janet Smith\r\nEND:VCARD\r\n"


@pytest.mark.asyncio
async def test_each_vcf_file_is_a_container(tmp_path):
    (tmp_path / "work.vcf").write_text(WORK_VCF, encoding="utf-8")
    (tmp_path / "home.VCF").write_text(HOME_VCF, encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not a card", encoding="utf-8")
    source = VCardDirectorySource(tmp_path)

    containers = await source.list_containers()
    contacts = await source.list_contacts(containers)

    assert sorted(c.name for c in containers) == ["home", "work"]
    assert len(contacts) == 3
    assert {c.container for c in contacts} == {"home", "work"}


@pytest.mark.asyncio
async def test_missing_directory_raises():
    source = VCardDirectorySource("/nonexistent/contacts")
    with pytest.raises(ContactSourceError):
        await source.list_containers()


@pytest.mark.asyncio
async def test_unreadable_container_raises(tmp_path):
    source = VCardDirectorySource(tmp_path)
    with pytest.raises(ContactSourceError):
        await source.list_contacts([ContainerRef(identifier=str(tmp_path / "gone.vcf"), name="gone")])


@pytest.mark.asyncio
async def test_resolver_over_vcard_directory(tmp_path):
    (tmp_path / "work.vcf").write_text(WORK_VCF, encoding="utf-8")
    (tmp_path / "home.vcf").write_text(HOME_VCF, encoding="utf-8")
    picker = DismissingPicker()
    resolver = NameResolver(VCardDirectorySource(tmp_path), picker)

    resolution = await resolver.resolve_detailed("Jan", "Smith")

    assert resolution.outcome is ResolutionOutcome.AMBIGUOUS
    assert sorted(c.label for c in picker.presented[0]) == ["Jane Smith", "Janet Smith"]


@pytest.mark.asyncio
async def test_resolver_survives_missing_directory():
    resolver = NameResolver(VCardDirectorySource("/nonexistent/contacts"), DismissingPicker())
    assert await resolver.resolve("Jane", "Smith") == []


@pytest.mark.asyncio
async def test_unknown_in_memory_container():
    source = InMemoryContactSource({"a": [Contact(given_name="A")]})
    with pytest.raises(ContactSourceError):
        await source.list_contacts([ContainerRef(identifier="b")])
