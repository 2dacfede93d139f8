"""Partition task records by their owning organization."""

from __future__ import annotations

from typing import Dict, Iterable, List

from reporting.models import GroupedOrganization, TaskRecord


def group_by_organization(tasks: Iterable[TaskRecord]) -> List[GroupedOrganization]:
    """Group tasks by organization id in first-seen order.

    Tasks without an organization cannot be tabulated and are skipped.
    """
    groups: Dict[int | str, GroupedOrganization] = {}
    for task in tasks:
        organization = task.organization
        if organization is None:
            continue
        group = groups.get(organization.id)
        if group is None:
            group = GroupedOrganization(organization=organization)
            groups[organization.id] = group
        group.tasks.append(task)
    return list(groups.values())
