"""
Query name (QNAME) generation.
"""

from dataclasses import dataclass

from fastx2bam.io.record import SequenceRecord


@dataclass(frozen=True)
class IdentifierPolicy:
    """
    How query names are built from input records.

    Attributes:
        rename: Replace record names with 1-based sequential integers
        prefix: Text put before every name
        suffix: Text put after every name
    """
    rename: bool = False
    prefix: str = ""
    suffix: str = ""


class NameTransform:
    """
    Computes the QNAME for each record of one run.

    ``count`` is the ordinal of the last record named. It only ever
    grows, so a transform must not be shared between runs.

    Example:
        >>> transform = NameTransform(IdentifierPolicy(rename=True, prefix="R"))
        >>> transform.name_for(SequenceRecord("read_a", "ACGT"))
        'R1'
    """

    def __init__(self, policy: IdentifierPolicy = IdentifierPolicy()):
        self.policy = policy
        self.count = 0

    def name_for(self, record: SequenceRecord) -> str:
        self.count += 1
        if self.policy.rename:
            name = str(self.count)
        else:
            name = record.name
        return f"{self.policy.prefix}{name}{self.policy.suffix}"
