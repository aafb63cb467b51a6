import pathlib
import operator

import pytest

try:
    from yaml import CSafeLoader as SafeLoader, load
except ImportError:
    from yaml import SafeLoader, load  # type: ignore

import ua_extract


DATA_DIR = pathlib.Path(__file__).resolve().parent / "data"

MISSING_UA = {"family": "Other", "brand": None, "model": None}
get_reference = operator.itemgetter(*MISSING_UA)
get_result = operator.attrgetter(*MISSING_UA)


@pytest.mark.parametrize(
    "test_file",
    [
        DATA_DIR / "test_device.yaml",
    ],
    ids=operator.attrgetter("name"),
)
def test_device(test_file: pathlib.Path) -> None:
    with (DATA_DIR / "regexes.yaml").open("rb") as f:
        contents = load(f, Loader=SafeLoader)

    parser = ua_extract.DeviceExtractor(
        (
            t["regex"],
            t.get("regex_flag"),
            t.get("device_replacement"),
            t.get("brand_replacement"),
            t.get("model_replacement"),
            tuple(
                (
                    o["field"],
                    o["regex"],
                    o["replacement"],
                    o.get("source", "field"),
                    o.get("regex_flag"),
                )
                for o in t.get("overrides", ())
            ),
        )
        for t in contents["device_parsers"]
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


def test_defaults_to_first_group_for_family_and_model() -> None:
    parser = ua_extract.DeviceExtractor([(r"; (Pixel \d+)[;)]",)])
    r = parser.extract("Mozilla/5.0 (Linux; Android 12; Pixel 6) AppleWebKit/537.36")
    assert get_result(r) == ("Pixel 6", None, "Pixel 6")


def test_regex_flag_is_case_insensitive() -> None:
    strict = ua_extract.DeviceExtractor([(r"kindle", None, "Kindle")])
    relaxed = ua_extract.DeviceExtractor([(r"kindle", "i", "Kindle")])
    assert strict.extract("Mozilla/5.0 (Kindle Fire)") is None
    assert relaxed.extract("Mozilla/5.0 (Kindle Fire)").family == "Kindle"


def test_overrides_apply_in_order() -> None:
    parser = ua_extract.DeviceExtractor([
        ua_extract.DevicePattern(
            r"; (SM-\w+)\)",
            brand_replacement="samsung",
            overrides=(
                ua_extract.DeviceOverride("brand", "^samsung$", "Samsung"),
                ua_extract.DeviceOverride("device", r"^SM-(\w+)", "Galaxy $1"),
                ua_extract.DeviceOverride("device", r"^Galaxy (\w+)$", "Samsung Galaxy $1"),
            ),
        ),
    ])
    r = parser.extract("Mozilla/5.0 (Linux; Android 11; SM-G991B)")
    assert get_result(r) == ("Samsung Galaxy G991B", "Samsung", "SM-G991B")


def test_override_regex_flag_is_case_insensitive() -> None:
    def build(flag):
        return ua_extract.DeviceExtractor([
            ua_extract.DevicePattern(
                r"(Pixel \d+)",
                overrides=(ua_extract.DeviceOverride("model", "^PIXEL (\\d+)$", "Pixel Phone $1", "field", flag),),
            ),
        ])

    assert build(None).extract("Android; Pixel 6").model == "Pixel 6"
    assert build("i").extract("Android; Pixel 6").model == "Pixel Phone 6"


def test_override_skips_absent_field() -> None:
    parser = ua_extract.DeviceExtractor([
        ua_extract.DevicePattern(
            r"(Nexus \d+)",
            overrides=(ua_extract.DeviceOverride("brand", ".*", "LG"),),
        ),
    ])
    assert parser.extract("Android 4.4; Nexus 5 Build").brand is None


def test_override_does_not_change_match_outcome() -> None:
    parser = ua_extract.DeviceExtractor([
        ua_extract.DevicePattern(
            r"(Nexus \d+)",
            overrides=(ua_extract.DeviceOverride("device", "Nexus", "  "),),
        ),
    ])
    r = parser.extract("Android 4.4; Nexus 5 Build")
    assert r is not None
    assert get_result(r) == ("Other", None, "Nexus 5")


@pytest.mark.parametrize(
    "override",
    [
        ("colour", "x", "y"),
        ("model", "x", "y", "elsewhere"),
        ("model", "(", "y"),
        ("model", "x", "y", "field", "g"),
    ],
)
def test_bad_override_is_a_device_error(override) -> None:
    with pytest.raises(ua_extract.DevicePatternError):
        ua_extract.DeviceExtractor([("x", None, None, None, None, (override,))])
