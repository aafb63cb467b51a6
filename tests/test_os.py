import pathlib
import operator

import pytest

try:
    from yaml import CSafeLoader as SafeLoader, load
except ImportError:
    from yaml import SafeLoader, load  # type: ignore

import ua_extract


DATA_DIR = pathlib.Path(__file__).resolve().parent / "data"


MISSING_UA = {
    "family": "Other",
    "major": None,
    "minor": None,
    "patch": None,
    "patch_minor": None,
}
get_reference = operator.itemgetter(*MISSING_UA)
get_result = operator.attrgetter(*MISSING_UA)


@pytest.mark.parametrize(
    "test_file",
    [
        DATA_DIR / "test_os.yaml",
    ],
    ids=operator.attrgetter("name"),
)
def test_os(test_file: pathlib.Path) -> None:
    with (DATA_DIR / "regexes.yaml").open("rb") as f:
        contents = load(f, Loader=SafeLoader)

    parser = ua_extract.OSExtractor(
        (
            t["regex"],
            t.get("os_replacement"),
            t.get("os_v1_replacement"),
            t.get("os_v2_replacement"),
            t.get("os_v3_replacement"),
            t.get("os_v4_replacement"),
        )
        for t in contents["os_parsers"]
    )

    with test_file.open("rb") as f:
        contents = load(f, Loader=SafeLoader)

    for test_case in contents["test_cases"]:
        r = parser.extract(test_case["user_agent_string"])
        if r:
            result = get_result(r)
        else:
            result = get_reference(MISSING_UA)

        assert result == get_reference(test_case)


def test_os_v4_replacement_fills_patch_minor() -> None:
    parser = ua_extract.OSExtractor([
        (r"Windows NT (\d+)\.(\d+)", "Windows", "$1", "$2", None, "build $2"),
    ])
    r = parser.extract("Mozilla/5.0 (Windows NT 6.1; WOW64)")
    assert (r.family, r.major, r.minor, r.patch, r.patch_minor) == (
        "Windows", "6", "1", None, "build 1",
    )
    assert r.version == "6.1"


def test_numeric_replacement_is_stringified() -> None:
    parser = ua_extract.OSExtractor([
        ua_extract.OSPattern(r"Windows NT 10\.0", "Windows", 10),
    ])
    assert parser.extract("Windows NT 10.0").major == "10"
