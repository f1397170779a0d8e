from __future__ import annotations

from talea.core.notifications import NotificationCenter
from talea.schemas import NotificationType


class _Clock:
    def __init__(self) -> None:
        self.now = 1_000.0

    def __call__(self) -> float:
        return self.now


def test_notifications_expire_after_duration():
    clock = _Clock()
    center = NotificationCenter(clock=clock)
    first = center.success("Saved!", "Item added to your collection")
    sticky = center.error("Save Failed", "Could not save item.", duration_ms=0)

    clock.now += 4.9
    assert [item.id for item in center.active()] == [first.id, sticky.id]

    clock.now += 0.2
    assert [item.id for item in center.active()] == [sticky.id]


def test_ids_are_unique_within_the_same_millisecond():
    center = NotificationCenter(clock=_Clock())
    ids = {center.info("Removed", "gone").id for _ in range(5)}
    assert len(ids) == 5


def test_dismiss_and_clear():
    center = NotificationCenter(clock=_Clock())
    keep = center.warning("Careful", "one")
    drop = center.add("info", "Removed", "two")

    assert drop.type is NotificationType.INFO
    assert center.dismiss(drop.id) is True
    assert center.dismiss(drop.id) is False
    assert center.active() == [keep]

    center.clear()
    assert center.active() == []
