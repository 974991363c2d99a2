"""Manual approval gate provider."""

from __future__ import annotations

from pipeforge.models.actions import Action, ActionCategory


class ManualApprovalProvider:
    """Default ``ApprovalProvider``.

    Parameters
    ----------
    notification_topic_arn:
        Optional SNS topic notified when an approval is pending.
    """

    def __init__(self, notification_topic_arn: str | None = None) -> None:
        self.notification_topic_arn = notification_topic_arn

    def approve(
        self,
        *,
        action_name: str,
        run_order: int,
        additional_information: str | None = None,
    ) -> Action:
        configuration: dict[str, str] = {}
        if additional_information:
            configuration["CustomData"] = additional_information
        if self.notification_topic_arn:
            configuration["NotificationArn"] = self.notification_topic_arn
        return Action(
            action_name=action_name,
            run_order=run_order,
            category=ActionCategory.APPROVAL,
            provider="Manual",
            configuration=configuration,
        )
