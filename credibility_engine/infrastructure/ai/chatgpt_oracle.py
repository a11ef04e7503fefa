"""ChatGPT implementation of the analysis oracle interface."""

import json
import logging
from typing import Dict, List, Optional

from openai import AsyncOpenAI
from pydantic import BaseModel, Field

from ...domain.models.claim import Claim
from ...domain.models.interaction import Interaction
from ...domain.models.oracle_result import Err, Ok, OracleResult
from ...domain.models.report import ReportItem
from ...domain.models.source import Source
from ...domain.ports.analysis_oracle import (
    AnalysisOracle,
    ClaimDigest,
    ExtractedClaim,
    VerificationOutcome,
)
from ...domain.ports.evidence_provider import EvidenceProvider, EvidenceSnippet
from .response_parsing import parse_extraction, parse_interactions, parse_verification

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = """
You are a credibility engine that evaluates the credibility of text.
Your goal is to extract factual claims, analyze the source's bias based on its type (e.g., CEO vs. Scientist),
and assign a credibility score (0-100).
- Financial Reports/Press Releases: High potential for positive bias.
- Academic Papers: Lower bias, high methodological weight.
- Marketing/Commercials: High bias, low credibility without external proof.
"""

REPORT_RULES = """
You are an expert Research Editor.
Your task is to generate a "Refined Intelligence Report" based on the following extracted claims and their verification status.

Rules for the Report:
1. **Truth Filter**: Eliminate any claims that are marked as flagged OR have a low credibility score (<50) AND were not corrected by verification.
2. **Enhancement**: If a claim was verified and the verification offers a correction or more detail, use the VERIFIED TRUTH, not the original claim.
3. **Synthesis**: Do not just list facts. Weave them into a professional, cohesive narrative.
4. **Structure**: Use Markdown. Include an Executive Summary, Key Findings, and a Risk/Bias Note.
"""


class ChatGPTOracleConfig(BaseModel):
    """Configuration for the ChatGPT oracle."""

    api_key: str = Field(..., description="OpenAI API key")
    model: str = Field(default="gpt-4o-mini", description="Chat model to use")
    temperature: float = Field(default=0.2, description="Temperature for responses")
    max_tokens: int = Field(default=2000, description="Maximum tokens per response")
    timeout: float = Field(default=60.0, description="API timeout in seconds")
    max_evidence: int = Field(default=3, description="Evidence snippets used per verification")


class ChatGPTOracle(AnalysisOracle):
    """Analysis oracle backed by OpenAI chat completions.

    Verification is grounded on snippets from an optional evidence provider.
    Every public call returns ``Err`` instead of raising.
    """

    def __init__(
        self,
        config: Optional[ChatGPTOracleConfig] = None,
        evidence_provider: Optional[EvidenceProvider] = None,
    ):
        """Initialize the oracle.

        Args:
            config: Oracle configuration
            evidence_provider: Source of external evidence for verification
        """
        self._config = config or ChatGPTOracleConfig(api_key="")
        self._evidence = evidence_provider
        self._client: Optional[AsyncOpenAI] = None
        self._initialized = False

    async def initialize(self) -> None:
        """Create the API client."""
        if not self._config.api_key:
            raise ConnectionError("Failed to initialize ChatGPT oracle: no API key configured")

        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._config.api_key,
                timeout=self._config.timeout,
            )
        self._initialized = True
        logger.info(f"✅ ChatGPT oracle ready (model={self._config.model})")

    async def _complete(self, system_prompt: str, user_prompt: str, as_json: bool = True) -> str:
        if not self._client:
            raise RuntimeError("Oracle not initialized")

        request = {
            "model": self._config.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
        }
        if as_json:
            request["response_format"] = {"type": "json_object"}

        response = await self._client.chat.completions.create(**request)
        return response.choices[0].message.content or ""

    async def extract_claims(self, text: str, source: Source) -> OracleResult[List[ExtractedClaim]]:
        """Extract atomic claims with bias analysis and an initial score."""
        user_prompt = f"""
        Analyze the following text from a source of type "{source.category.label}".
        Source Name: "{source.name}".

        Extract key factual claims. For each claim:
        1. Identify if it is a verifiable fact or a subjective opinion.
        2. Analyze bias. (e.g., A CEO saying "We are the best" is low credibility).
        3. Assign a credibility score.

        Respond in JSON format:
        {{
            "claims": [
                {{
                    "claimText": "The atomic factual claim extracted",
                    "context": "The immediate context or speaker intent",
                    "biasAnalysis": "Why might this be biased?",
                    "score": 0-100
                }}
            ]
        }}

        Text:
        \"\"\"
        {text}
        \"\"\"
        """

        try:
            content = await self._complete(SYSTEM_INSTRUCTION, user_prompt)
        except Exception as e:
            logger.error(f"❌ Claim extraction failed: {e}")
            return Err(f"extraction request failed: {e}")

        return parse_extraction(content)

    async def _gather_evidence(self, claim: Claim) -> List[EvidenceSnippet]:
        if self._evidence is None:
            return []
        try:
            return await self._evidence.search(claim.text, max_results=self._config.max_evidence)
        except Exception as e:
            logger.warning(f"⚠️ Evidence lookup failed for claim {claim.id}: {e}")
            return []

    async def verify_claim(self, claim: Claim) -> OracleResult[VerificationOutcome]:
        """Fact-check a claim against gathered evidence."""
        evidence = await self._gather_evidence(claim)
        evidence_text = "\n".join(
            f"- {snippet.title} ({snippet.url}): {snippet.summary}" for snippet in evidence
        ) or "No external evidence was found."

        system_prompt = """
        You are a fact-checking researcher. Your goal is to determine the TRUTH.
        1. Weigh the claim against the independent evidence provided.
        2. If the claim is FALSE or MISLEADING, explain why and provide the corrected fact.
        3. If the claim is TRUE, confirm it.
        Respond in JSON format with: {"summary": "Your verdict and explanation"}
        """
        user_prompt = (
            f'Fact-check this claim: "{claim.text}".\n'
            f"Context: {claim.context}.\n\n"
            f"Evidence:\n{evidence_text}"
        )

        try:
            content = await self._complete(system_prompt, user_prompt)
        except Exception as e:
            logger.error(f"❌ Claim verification failed: {e}")
            return Err(f"verification request failed: {e}")

        result = parse_verification(content)
        if not result.is_ok:
            return result

        if not evidence:
            return Ok(result.value.model_copy(update={"is_verified": False}))

        top = evidence[0]
        return Ok(
            result.value.model_copy(
                update={
                    "is_verified": True,
                    "source_title": top.title or "Web Source",
                    "source_url": top.url,
                }
            )
        )

    async def classify_interactions(
        self,
        existing: List[ClaimDigest],
        incoming: List[ClaimDigest],
    ) -> OracleResult[List[Interaction]]:
        """Judge whether new claims contradict or reinforce existing ones."""
        user_prompt = f"""
        I have a list of EXISTING claims and a list of NEW claims from a recent update.
        Determine if any NEW claim contradicts or strongly reinforces an EXISTING claim.

        EXISTING: {json.dumps([digest.model_dump() for digest in existing])}
        NEW: {json.dumps([digest.model_dump() for digest in incoming])}

        Respond in JSON format:
        {{
            "interactions": [
                {{"existingId": "id of the EXISTING claim", "interaction": "contradicts" | "reinforces" | "neutral", "reason": "why"}}
            ]
        }}
        """

        try:
            content = await self._complete("You reconcile claims across sources.", user_prompt)
        except Exception as e:
            logger.error(f"❌ Conflict classification failed: {e}")
            return Err(f"classification request failed: {e}")

        return parse_interactions(content)

    async def synthesize_report(self, items: List[ReportItem]) -> OracleResult[str]:
        """Write the refined report in Markdown."""
        user_prompt = f"Input Data:\n{json.dumps([item.model_dump() for item in items])}"

        try:
            content = await self._complete(REPORT_RULES, user_prompt, as_json=False)
        except Exception as e:
            logger.error(f"❌ Report generation failed: {e}")
            return Err(f"synthesis request failed: {e}")

        return Ok(content)

    async def shutdown(self) -> None:
        """Clean up resources and shut down the oracle."""
        if self._client:
            await self._client.close()
            self._client = None
        self._initialized = False

    @property
    def provider_name(self) -> str:
        """Get the name of the oracle."""
        return "ChatGPT"

    @property
    def is_available(self) -> bool:
        """Check if the oracle is available and ready."""
        return self._initialized and self._client is not None

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the oracle's capabilities."""
        return {
            "claim_extraction": True,
            "claim_verification": True,
            "evidence_grounding": self._evidence is not None,
            "conflict_classification": True,
            "report_synthesis": True,
        }
