"""Interactive console for the credibility engine."""

import asyncio
from typing import Optional, Sequence

from .domain.models.claim import Claim
from .infrastructure.dependencies import ServiceContainer

HELP = """Commands:
  analyze <text>    ingest a source and extract claims
  update <text>     ingest a supplemental source and resolve conflicts
  claims            list current claims
  verify <number>   verify a claim from the list
  report            generate the refined report
  quit              exit"""


def select_claim(claims: Sequence[Claim], argument: str) -> Optional[Claim]:
    """Pick a claim by its 1-based list number, or None if there is no such number."""
    try:
        number = int(argument)
    except ValueError:
        return None
    if not 1 <= number <= len(claims):
        return None
    return claims[number - 1]


def print_claim(number: int, claim: Claim) -> None:
    """Print one claim line."""
    marker = "*" if claim.is_new else " "
    print(
        f"{marker}{number:>3}. [{claim.credibility_level.value:<6} {claim.credibility_score:>3}] "
        f"({claim.status.value}) {claim.text}"
    )
    if claim.verification:
        print(f"       verification: {claim.verification.summary[:200]}")


async def main():
    """Run the credibility engine console."""
    print("Credibility Engine - claim tracking with incremental conflict resolution")
    print("-----------------------------------------------------------------------")
    print(HELP)

    container = ServiceContainer()
    service = await container.get_research_service()

    try:
        while True:
            line = input("\n> ").strip()
            command, _, argument = line.partition(" ")
            command = command.lower()

            if command in ('quit', 'exit', 'q'):
                break

            if command == "analyze":
                claims = await service.analyze_source(argument)
                print(f"\nExtracted {len(claims)} claims.")
            elif command == "update":
                claims = await service.apply_update(argument)
                print(f"\nMerged {len(claims)} new claims.")
            elif command == "claims":
                snapshot = await service.snapshot()
                for number, claim in enumerate(snapshot.claims, 1):
                    print_claim(number, claim)
            elif command == "verify":
                snapshot = await service.snapshot()
                claim = select_claim(snapshot.claims, argument)
                if claim is None:
                    print("\nUnknown claim number. Use 'claims' to list them.")
                    continue
                print("\nVerifying...")
                updated = await service.verify_claim(claim.id)
                if updated:
                    print_claim(int(argument), updated)
            elif command == "report":
                print("\nSynthesizing report...")
                print(await service.generate_report())
            else:
                print(HELP)

    finally:
        # Clean up
        await container.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
