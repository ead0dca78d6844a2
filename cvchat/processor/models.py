from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProcessResult:
    """What a successful processing run hands back to the caller."""

    summary: str
    extracted_text: str
    prompts: list[str] = field(default_factory=list)
