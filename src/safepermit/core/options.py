from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Literal

QUALITY_REWORK = "quality_rework"
NO_HAZARD = "none"

OptionKind = Literal[
    "work_location",
    "work_type",
    "work_content",
    "hazard_type",
    "work_basis",
    "working_hours",
    "start_time",
]


@dataclass(frozen=True, slots=True)
class Option:
    value: str
    label: str


@dataclass(frozen=True, slots=True)
class OptionSet:
    """An immutable list of value/label pairs.

    Lookups never fail: an unknown code renders as itself so legacy values
    still display, and an unknown label resolves to an empty code.
    """

    name: str
    options: tuple[Option, ...]

    def label_of(self, code: str) -> str:
        for option in self.options:
            if option.value == code:
                return option.label
        return code

    def code_of(self, label: str) -> str:
        for option in self.options:
            if option.label == label:
                return option.value
        return ""

    def codes(self) -> list[str]:
        return [option.value for option in self.options]

    def as_dicts(self) -> list[dict[str, str]]:
        return [{"value": option.value, "label": option.label} for option in self.options]


def _option_set(name: str, pairs: list[tuple[str, str]]) -> OptionSet:
    return OptionSet(name=name, options=tuple(Option(value, label) for value, label in pairs))


WORK_LOCATIONS = _option_set(
    "work_location",
    [
        ("delivery_workshop_shunting", "交车车间落车调车区"),
        ("assembly_workshop", "总成车间"),
        ("old_debugging", "老调试"),
        ("new_debugging", "新调试"),
        ("emu_debugging_base", "动车组调试基地"),
        ("maglev_workshop", "磁浮厂房"),
        ("outside_depot", "库外"),
    ],
)

WORK_TYPES = _option_set(
    "work_type",
    [
        (QUALITY_REWORK, "质量返工"),
        ("furniture_maintenance", "家具维修及活动策划"),
        ("tooling_work", "工装工具相关作业"),
        ("field_research", "现场调研"),
        ("infrastructure_construction", "基建施工"),
        ("production_equipment_maintenance", "生产设备维修"),
        ("office_equipment_maintenance", "办公设备设施维修"),
        ("vehicle_maintenance", "车辆检修作业"),
        ("component_assembly", "部件装配作业"),
        ("vehicle_debugging_cooperation", "配合车辆调试作业"),
    ],
)

WORK_CONTENT_OPTIONS: dict[str, OptionSet] = {
    QUALITY_REWORK: _option_set(
        "work_content",
        [
            ("incoming_material_rework", "来料不合格项返工"),
            ("q30_rework", "Q30不合格项返工"),
            ("q40_rework", "Q40不合格项返工"),
            ("psi_rework", "PSI不合格项返工"),
            ("owner_rework", "业主不合格项返工"),
            ("ncr_rework", "NCR返工"),
        ],
    ),
    "furniture_maintenance": _option_set(
        "work_content",
        [
            ("furniture_repair", "家具维修"),
            ("activity_planning", "活动策划安排"),
        ],
    ),
    "tooling_work": _option_set(
        "work_content",
        [
            ("tool_delivery", "工具送货"),
            ("tool_maintenance", "工具维修"),
            ("tool_measurement", "工具计量"),
            ("tooling_delivery", "工装送货"),
            ("tooling_verification", "工装验证"),
            ("tooling_modification", "工装改造维修"),
            ("tooling_after_sales", "工装售后维护"),
        ],
    ),
    "field_research": _option_set(
        "work_content",
        [
            ("visit_research", "参观调研"),
            ("interview_research", "采访调研"),
            ("process_technical_research", "工艺技术调研"),
            ("quality_technical_research", "质量技术调研"),
            ("equipment_facility_research", "设备设施调研"),
        ],
    ),
    "infrastructure_construction": _option_set(
        "work_content",
        [("building_maintenance", "建筑物及附属设施维护维修")],
    ),
    "production_equipment_maintenance": _option_set(
        "work_content",
        [("equipment_routine_maintenance", "设备常规维护保养及故障维修")],
    ),
    "office_equipment_maintenance": _option_set(
        "work_content",
        [
            ("computer", "电脑"),
            ("printer_audio", "打印机"),
            ("audio", "音响"),
        ],
    ),
    "vehicle_maintenance": _option_set(
        "work_content",
        [("vehicle_maintenance_work", "车辆检修作业")],
    ),
    "component_assembly": _option_set(
        "work_content",
        [("component_assembly_work", "部件装配作业")],
    ),
    "vehicle_debugging_cooperation": _option_set(
        "work_content",
        [
            ("static_debugging_cooperation", "配合静调作业"),
            ("dynamic_debugging_cooperation", "配合动调作业"),
        ],
    ),
}

EMPTY_WORK_CONTENT = OptionSet(name="work_content", options=())

HAZARD_TYPES = _option_set(
    "hazard_type",
    [
        ("vehicle_debugging", "配合车辆静、动态调试作业"),
        ("high_altitude", "登高作业"),
        ("hot_work", "动火作业"),
        ("chemical_use", "危化品使用"),
        ("metal_cutting", "金属切割作业"),
        ("lifting", "吊装作业"),
        ("temporary_electrical", "临时用电作业"),
        ("confined_space", "有限空间作业"),
        ("cross_operation", "交叉作业"),
        ("edge_work", "临边作业"),
        (NO_HAZARD, "无"),
    ],
)

WORK_BASES = _option_set(
    "work_basis",
    [
        ("ncr", "NCR"),
        ("nonconformity", "不合格项"),
        ("design_change", "设计变更"),
    ],
)

WORKING_HOURS = _option_set(
    "working_hours",
    [
        ("half_day", "半天"),
        ("one_day", "一天"),
        ("one_half_day", "一天半"),
        ("two_days", "两天"),
        ("two_half_days", "两天半"),
        ("three_days", "三天"),
    ],
)

# A working day counts as eight hours.
WORKING_HOURS_DURATION: dict[str, int] = {
    "half_day": 4,
    "one_day": 8,
    "one_half_day": 12,
    "two_days": 16,
    "two_half_days": 20,
    "three_days": 24,
}

START_TIMES = _option_set(
    "start_time",
    [
        ("morning", "上午"),
        ("afternoon", "下午"),
    ],
)

START_TIME_CLOCK: dict[str, time] = {
    "morning": time(8, 0),
    "afternoon": time(14, 0),
}
DEFAULT_START_CLOCK = time(20, 0)

OPTION_SETS: dict[str, OptionSet] = {
    "work_location": WORK_LOCATIONS,
    "work_type": WORK_TYPES,
    "hazard_type": HAZARD_TYPES,
    "work_basis": WORK_BASES,
    "working_hours": WORKING_HOURS,
    "start_time": START_TIMES,
}


def work_content_options(work_type: str) -> OptionSet:
    """Content options scoped to a work type; unknown work types have none."""
    return WORK_CONTENT_OPTIONS.get(work_type, EMPTY_WORK_CONTENT)


def options_catalog() -> dict[str, object]:
    catalog: dict[str, object] = {name: option_set.as_dicts() for name, option_set in OPTION_SETS.items()}
    catalog["work_content"] = {
        work_type: option_set.as_dicts() for work_type, option_set in WORK_CONTENT_OPTIONS.items()
    }
    return catalog
