"""Snapshot relay request/response models."""

from pydantic import BaseModel, RootModel

from reimagined.services.exceptions import InvalidSnapshotRequest


class SnapshotRequest(BaseModel):
    """Named prompts, one per report section, in the order they should run."""

    sections: dict[str, str]

    @classmethod
    def from_payload(cls, payload: object) -> "SnapshotRequest":
        """Validate a decoded JSON body.

        Raises InvalidSnapshotRequest naming the first offending key; nothing
        about the request is kept when validation fails.
        """
        if not isinstance(payload, dict):
            raise InvalidSnapshotRequest("Request body must be a JSON object.")

        sections = payload.get("sections")
        if not isinstance(sections, dict):
            raise InvalidSnapshotRequest(
                'Request body must include a "sections" object mapping keys to prompts.'
            )

        for key, prompt in sections.items():
            if not isinstance(prompt, str) or not prompt.strip():
                raise InvalidSnapshotRequest(
                    f'Prompt for section "{key}" must be a non-empty string.'
                )

        return cls(sections=sections)


class SnapshotResponse(RootModel[dict[str, str]]):
    """Completion text keyed by the same section keys as the request."""
