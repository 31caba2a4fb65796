"""Unit tests for ObservationContext and the structlog probe base."""

from unittest.mock import MagicMock

from shared_kernel.notifications import DefaultEmailProbe
from shared_kernel.observability_context import ObservationContext


class TestObservationContext:
    def test_as_dict_omits_unset_values(self):
        context = ObservationContext(user_id="01USER")

        assert context.as_dict() == {"user_id": "01USER"}

    def test_with_extra_returns_new_context(self):
        context = ObservationContext(request_id="req-1", team_id="01TEAM")

        extended = context.with_extra(idea_id="01IDEA")

        assert extended.as_dict() == {
            "request_id": "req-1",
            "team_id": "01TEAM",
            "idea_id": "01IDEA",
        }
        assert context.extra == {}


class TestStructlogProbeContext:
    def test_bound_context_is_logged(self):
        logger = MagicMock()
        probe = DefaultEmailProbe(logger=logger).with_context(
            ObservationContext(request_id="req-1")
        )

        probe.email_rendered(
            recipient="a@b.c", subject="s", body="b", sender="noreply@innofolio.com"
        )

        logger.info.assert_called_once()
        assert logger.info.call_args.kwargs["request_id"] == "req-1"

    def test_with_context_keeps_probe_type(self):
        probe = DefaultEmailProbe(logger=MagicMock())

        assert isinstance(probe.with_context(ObservationContext()), DefaultEmailProbe)
