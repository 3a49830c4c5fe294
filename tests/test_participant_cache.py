import pytest

from gpml2wprdf.data_structure.resolved_structure import ParticipantIdentity
from gpml2wprdf.errors import DuplicateParticipantError
from gpml2wprdf.utils.participant_cache import ParticipantCache, sanitize_element_id


def test_put_and_get():
    cache = ParticipantCache()
    identity = ParticipantIdentity(iri="https://identifiers.org/ncbigene/1", elementId="a")
    cache.put("a", identity)

    assert cache.get("a") is identity
    assert "a" in cache
    assert len(cache) == 1
    assert cache.values() == [identity]


def test_get_unknown_or_empty_id():
    cache = ParticipantCache()

    assert cache.get("nope") is None
    assert cache.get("") is None
    assert cache.get(None) is None


def test_second_put_for_same_id_raises():
    cache = ParticipantCache()
    first = ParticipantIdentity(iri="https://identifiers.org/ncbigene/1", elementId="a")
    cache.put("a", first)

    with pytest.raises(DuplicateParticipantError) as excinfo:
        cache.put("a", ParticipantIdentity(iri="https://identifiers.org/ncbigene/2", elementId="a"))

    assert excinfo.value.element_id == "a"
    assert cache.get("a") is first


def test_sanitize_element_id():
    assert sanitize_element_id("abc_1.2-x") == "abc_1.2-x"
    assert sanitize_element_id("id with space/slash") == "id_with_space_slash"
    assert sanitize_element_id("") == ""
