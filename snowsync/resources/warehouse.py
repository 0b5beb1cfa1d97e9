from dataclasses import dataclass
from typing import Optional

from ..enums import ResourceType, WarehouseScalingPolicy, WarehouseSize
from ..props import BoolProp, EnumProp, IntProp, Props, StringProp
from .resource import Reconciler, ResourceSpec, _none_if_empty, _to_bool, _to_int


@dataclass(frozen=True)
class WarehouseSpec(ResourceSpec):
    size: WarehouseSize = WarehouseSize.XSMALL
    auto_suspend: Optional[int] = 600
    auto_resume: bool = True
    initially_suspended: Optional[bool] = None
    max_cluster_count: Optional[int] = None
    min_cluster_count: Optional[int] = None
    scaling_policy: Optional[WarehouseScalingPolicy] = None
    comment: Optional[str] = None

    resource_type = ResourceType.WAREHOUSE
    write_only_fields = ("initially_suspended",)
    create_only_fields = ("initially_suspended",)
    enterprise_only_fields = ("max_cluster_count", "min_cluster_count", "scaling_policy")

    def __post_init__(self):
        super().__post_init__()
        self._coerce("size", WarehouseSize)
        self._coerce("scaling_policy", WarehouseScalingPolicy)
        if self.min_cluster_count is not None and self.max_cluster_count is not None:
            if self.min_cluster_count > self.max_cluster_count:
                raise ValueError("min_cluster_count must be less than or equal to max_cluster_count")


class Warehouse(Reconciler):
    """
    Description:
        A virtual warehouse, the compute cluster that runs queries.

    Snowflake Docs:
        https://docs.snowflake.com/en/sql-reference/sql/create-warehouse

    Fields:
        name (string, required): The name of the warehouse.
        size (string or WarehouseSize): The size of the warehouse. Defaults to XSMALL.
        auto_suspend (int): Seconds of inactivity before the warehouse suspends. Defaults to 600.
        auto_resume (bool): Resume automatically when a statement is submitted. Defaults to True.
        initially_suspended (bool): Create the warehouse suspended. Only used at creation.
        max_cluster_count (int): Maximum number of clusters. Enterprise edition only.
        min_cluster_count (int): Minimum number of clusters. Enterprise edition only.
        scaling_policy (string or WarehouseScalingPolicy): STANDARD or ECONOMY. Enterprise edition only.
        comment (string): A comment for the warehouse.
    """

    resource_type = ResourceType.WAREHOUSE
    spec = WarehouseSpec
    props = Props(
        size=EnumProp("warehouse_size", WarehouseSize),
        auto_suspend=IntProp("auto_suspend"),
        auto_resume=BoolProp("auto_resume"),
        initially_suspended=BoolProp("initially_suspended"),
        max_cluster_count=IntProp("max_cluster_count"),
        min_cluster_count=IntProp("min_cluster_count"),
        scaling_policy=EnumProp("scaling_policy", WarehouseScalingPolicy),
        comment=StringProp("comment"),
    )

    def spec_from_row(self, row: dict) -> WarehouseSpec:
        scaling_policy = _none_if_empty(row.get("scaling_policy"))
        return WarehouseSpec(
            name=row["name"],
            size=WarehouseSize(row["size"]),
            auto_suspend=_to_int(row.get("auto_suspend")),
            auto_resume=_to_bool(row.get("auto_resume")),
            max_cluster_count=_to_int(row.get("max_cluster_count")),
            min_cluster_count=_to_int(row.get("min_cluster_count")),
            scaling_policy=WarehouseScalingPolicy(scaling_policy) if scaling_policy else None,
            comment=_none_if_empty(row.get("comment")),
        )
