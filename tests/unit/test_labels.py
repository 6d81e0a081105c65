from __future__ import annotations

from datetime import time

from safepermit.core import labels
from safepermit.core.options import (
    HAZARD_TYPES,
    OPTION_SETS,
    WORK_CONTENT_OPTIONS,
    options_catalog,
    work_content_options,
)


def test_every_declared_option_round_trips() -> None:
    for option_set in OPTION_SETS.values():
        for option in option_set.options:
            assert option_set.code_of(option_set.label_of(option.value)) == option.value

    for work_type, option_set in WORK_CONTENT_OPTIONS.items():
        for code in option_set.codes():
            label = labels.work_content_label(work_type, code)
            assert labels.work_content_code(work_type, label) == code


def test_unknown_code_renders_as_itself() -> None:
    assert labels.work_location_label("retired_site") == "retired_site"
    assert labels.work_type_label("legacy_type") == "legacy_type"
    assert labels.work_content_label("quality_rework", "unknown_content") == "unknown_content"
    assert labels.to_label("work_basis", "other") == "other"


def test_unknown_label_resolves_to_empty_code() -> None:
    assert labels.work_location_code("不存在的地点") == ""
    assert labels.to_code("work_type", "未知类型") == ""


def test_work_content_is_scoped_to_work_type() -> None:
    assert labels.work_content_label("quality_rework", "ncr_rework") == "NCR返工"
    assert labels.work_content_label("field_research", "ncr_rework") == "ncr_rework"
    assert work_content_options("no_such_type").codes() == []


def test_known_labels() -> None:
    assert labels.work_type_label("quality_rework") == "质量返工"
    assert labels.work_location_label("old_debugging") == "老调试"
    assert labels.working_hours_label("one_half_day") == "一天半"
    assert labels.start_time_label("afternoon") == "下午"


def test_hazard_types_join_with_full_width_comma() -> None:
    text = labels.hazard_types_label(["high_altitude", "hot_work"])
    assert text == "登高作业，动火作业"
    assert labels.hazard_types_codes(text) == ["high_altitude", "hot_work"]


def test_hazard_label_containing_enumeration_comma_survives_round_trip() -> None:
    codes = ["vehicle_debugging", "lifting"]
    assert labels.hazard_types_codes(labels.hazard_types_label(codes)) == codes


def test_no_hazard_renders_and_parses_as_empty() -> None:
    assert labels.hazard_types_label([]) == "无"
    assert labels.hazard_types_label(["none"]) == "无"
    assert labels.hazard_types_label(["none", "lifting"]) == "吊装作业"
    assert labels.hazard_types_codes("无") == []
    assert labels.hazard_types_codes("") == []


def test_every_hazard_code_round_trips_alone() -> None:
    for code in HAZARD_TYPES.codes():
        expected = [] if code == "none" else [code]
        assert labels.hazard_types_codes(labels.hazard_types_label([code])) == expected


def test_start_time_label_for_clock() -> None:
    assert labels.start_time_label_for(time(8, 0)) == "上午"
    assert labels.start_time_label_for(time(14, 0)) == "下午"
    assert labels.start_time_label_for(time(20, 0)) == "20:00"


def test_working_hours_code_for_hours() -> None:
    assert labels.working_hours_code_for(4) == "half_day"
    assert labels.working_hours_code_for(24) == "three_days"
    assert labels.working_hours_code_for(5) == ""


def test_options_catalog_groups_work_content() -> None:
    catalog = options_catalog()
    assert {"value": "ncr", "label": "NCR"} in catalog["work_basis"]
    assert "quality_rework" in catalog["work_content"]
    assert catalog["work_content"]["quality_rework"][-1] == {"value": "ncr_rework", "label": "NCR返工"}
