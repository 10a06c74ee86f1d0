from src.safety.aeb import BrakeState, evaluate
from src.tracking.detected_object import DetectedObject
from src.tracking.object_ranker import ObjectRanker


def make_ranker(*rows):
    return ObjectRanker(DetectedObject(*row) for row in rows)


def test_emergency_brake_when_object_within_critical_threshold():
    ranker = make_ranker((1, 15.0, -20.0), (2, 50.0, -5.0), (3, 100.0, 2.0))
    decision = evaluate(ranker, critical_s=2.0, warning_s=5.0)
    assert decision.state is BrakeState.EMERGENCY_BRAKE
    assert decision.critical_count == 1
    assert decision.details["critical_ids"] == [1]


def test_precharge_when_only_warning_threshold_hit():
    ranker = make_ranker((1, 40.0, -10.0), (2, 100.0, 2.0))
    decision = evaluate(ranker, critical_s=2.0, warning_s=5.0)
    assert decision.state is BrakeState.PRECHARGE
    assert decision.critical_count == 0
    assert decision.warning_count == 1


def test_normal_when_nothing_approaching():
    decision = evaluate(make_ranker((1, 40.0, 3.0)), critical_s=2.0, warning_s=5.0)
    assert decision.state is BrakeState.NORMAL
    assert decision.warning_count == 0


def test_decision_does_not_reorder_objects():
    ranker = make_ranker((1, 40.0, -10.0), (2, 10.0, -10.0))
    evaluate(ranker, critical_s=2.0, warning_s=5.0)
    assert [o.id for o in ranker.objects] == [1, 2]
