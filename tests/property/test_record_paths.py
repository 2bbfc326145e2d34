import asyncio
import tempfile

from hypothesis import given, settings, strategies as st

from record_store.resolver import key_for_file_name, record_file_name
from record_store.store import RecordStore

_plain_keys = st.text(min_size=1, max_size=16).filter(
    lambda key: key.strip() and "/" not in key and "\\" not in key and not key.endswith(".json")
)

_json_values = st.recursive(
    st.none()
    | st.booleans()
    | st.integers()
    | st.floats(allow_nan=False, allow_infinity=False)
    | st.text(max_size=20),
    lambda children: st.lists(children, max_size=4) | st.dictionaries(st.text(max_size=8), children, max_size=4),
    max_leaves=12,
)


@given(_plain_keys)
def test_file_name_is_single_safe_segment(key: str) -> None:
    name = record_file_name(key)
    assert name.endswith(".json")
    assert not name.endswith(".json.json")
    assert "/" not in name and "\\" not in name


@given(_plain_keys)
def test_json_suffix_maps_to_same_file(key: str) -> None:
    assert record_file_name(key) == record_file_name(key + ".json")


@given(_plain_keys)
def test_file_name_decodes_to_key(key: str) -> None:
    assert key_for_file_name(record_file_name(key)) == key


@settings(max_examples=50, deadline=None)
@given(_plain_keys, _json_values)
def test_set_then_get_is_identity(key: str, value) -> None:
    async def scenario(root: str) -> None:
        store = RecordStore(root)
        await store.set(key, value)
        assert await store.get(key) == value
        assert await store.has(key) is True
        assert await store.keys() == [key]

    with tempfile.TemporaryDirectory() as root:
        asyncio.run(scenario(root))
