from typing import Any

from pydantic import BaseModel, Field


class CommanderLine(BaseModel):
    id: str
    name: str
    cost: int
    active_options: list[str] = Field(default_factory=list)
    active_upgrades: list[str] = Field(default_factory=list)


class UnitLine(BaseModel):
    uid: int
    unit_id: str
    name: str
    quantity: int | None = None
    cost: int
    role: str
    role_label: str
    cannon: str | None = None
    condition: str = "none"
    active_upgrades: list[str] = Field(default_factory=list)


class RosterSummary(BaseModel):
    faction_id: str
    points_limit: int
    commander: CommanderLine | None = None
    commander_cost: int
    units: list[UnitLine] = Field(default_factory=list)
    core_count: int
    support_count: int
    max_support: int
    total_cost: int
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_view(cls, view: dict[str, Any]) -> "RosterSummary":
        commander = view.get("commander")
        return cls(
            faction_id=view["faction_id"],
            points_limit=view["points_limit"],
            commander=CommanderLine(
                id=commander["id"],
                name=commander["name"],
                cost=commander["cost"],
                active_options=commander["active_options"],
                active_upgrades=commander["active_upgrades"],
            )
            if commander
            else None,
            commander_cost=view["commander_cost"],
            units=[
                UnitLine(
                    uid=entry["uid"],
                    unit_id=entry["unit_id"],
                    name=entry["name"],
                    quantity=entry["quantity"],
                    cost=entry["cost"],
                    role=entry["role"],
                    role_label=entry["role_label"],
                    cannon=entry["cannon"],
                    condition=entry["condition"],
                    active_upgrades=entry["active_upgrades"],
                )
                for entry in view["units"]
            ],
            core_count=view["core_count"],
            support_count=view["support_count"],
            max_support=view["max_support"],
            total_cost=view["total_cost"],
            warnings=view["warnings"],
        )
