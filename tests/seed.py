"""Shared test data container."""

from dataclasses import dataclass

from proposalcraft.models.entities import Organization, Proposal, User


@dataclass
class SeedData:
    """Entities created by the ``seeded`` fixture."""

    user: User
    organization: Organization
    proposal: Proposal
