"""Facility dispatch: sends an operator-chosen hospital to the unit."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from pyambulance.exceptions import ChannelUnavailableError, InvalidSelectionError
from pyambulance.models.commands import DispatchOutcome, DispatchResult, HospitalSelectCommand
from pyambulance.models.facility import FacilitySelection

_logger = logging.getLogger(__name__)


class CommandChannel(Protocol):
    """Structural interface for the outbound side of a channel.

    :class:`pyambulance.channel.TelemetryChannel` is the production
    implementation; tests can pass a double.
    """

    async def send_command(self, command: HospitalSelectCommand) -> None: ...


class FacilityDispatcher:
    """Validates facility selections and writes them to the channel.

    Delivery is fire-and-forget and at most once: the unit sends no
    acknowledgement and nothing is retried.
    """

    def __init__(self, channel: CommandChannel) -> None:
        self._channel = channel

    async def dispatch(self, selection: FacilitySelection | Mapping[str, Any]) -> DispatchResult:
        """Send *selection* to the unit.

        Never raises for invalid input or a closed channel; the outcome is
        reported in the returned :class:`DispatchResult` so the operator
        layer can show it.
        """
        try:
            valid = FacilitySelection.parse(selection)
        except InvalidSelectionError as exc:
            _logger.info("Rejected facility selection: %s", exc)
            return DispatchResult(outcome=DispatchOutcome.INVALID_SELECTION, message=str(exc))

        command = HospitalSelectCommand.from_selection(valid)
        try:
            await self._channel.send_command(command)
        except ChannelUnavailableError as exc:
            _logger.warning("Facility dispatch failed: %s", exc)
            return DispatchResult(outcome=DispatchOutcome.CHANNEL_UNAVAILABLE, message=str(exc))

        _logger.info("Dispatched facility %r at (%s, %s)", command.name, command.lat, command.lng)
        return DispatchResult(outcome=DispatchOutcome.SENT, command=command)
