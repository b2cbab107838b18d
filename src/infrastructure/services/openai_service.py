from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from src.application.errors import EnrichmentError
from src.application.interfaces.services.breeding_advisor import (
    AnimalProfile,
    BreedingAdvisor,
    HerdAnalysisRequest,
    PairPredictionRequest,
)

# Load prompts from files
PROMPTS_DIR = Path(__file__).parent / "prompts"
BREEDING_PAIR_PROMPT = (PROMPTS_DIR / "breeding_pair_system.txt").read_text(encoding="utf-8")
HERD_ANALYSIS_PROMPT = (PROMPTS_DIR / "herd_analysis_system.txt").read_text(encoding="utf-8")


def _describe_animal(animal: AnimalProfile, label: str) -> str:
    horn = f"{animal.horn_size}" if animal.horn_size is not None else "N/A"
    age = f"{animal.age} years" if animal.age is not None else "Unknown"
    return (
        f"{label} ({animal.sex}):\n"
        f"- Name: {animal.name}\n"
        f"- Species: {animal.species}\n"
        f"- Age: {age}\n"
        f"- Horn Size: {horn}\n"
        f"- Health Status: {animal.health_notes or 'No notes'}"
    )


def build_pair_prompt(request: PairPredictionRequest) -> str:
    return (
        "Analyze this breeding pair:\n\n"
        f"{_describe_animal(request.sire, 'Parent 1')}\n\n"
        f"{_describe_animal(request.dam, 'Parent 2')}\n\n"
        f"Local compatibility score: {request.compatibility_score:.1f} / 100\n\n"
        "Provide the predicted offspring traits, a confidence level (0.0 to 1.0) and a short "
        "explanation of the pairing's strengths and risks."
    )


def build_herd_prompt(request: HerdAnalysisRequest) -> str:
    descriptions = "\n\n".join(
        _describe_animal(animal, f"Animal {idx}")
        for idx, animal in enumerate(request.animals, start=1)
    )
    lineage_warning = ""
    if request.related_pairs:
        listed = "\n".join(
            f"- {p.animal1} and {p.animal2} ({p.relationship})" for p in request.related_pairs
        )
        lineage_warning = (
            "\n\nWARNING: This herd contains related animals that should not breed together:\n"
            f"{listed}\n\n"
            "Your breeding strategy MUST address separating these related animals to avoid "
            "inbreeding."
        )
    strategy_suffix = (
        " while avoiding inbreeding between related animals" if request.related_pairs else ""
    )
    return (
        "Analyze this breeding herd:\n\n"
        f"Total Animals: {len(request.animals)}\n"
        f"Males: {request.male_count}\n"
        f"Females: {request.female_count}\n\n"
        f"{descriptions}{lineage_warning}\n\n"
        "Provide:\n"
        "1. Estimated offspring count this herd could produce in one breeding season\n"
        '2. Genetic diversity assessment (e.g., "Excellent", "Good", "Fair", "Limited")\n'
        '3. Overall trait strength (e.g., "Excellent", "Strong", "Good", "Fair")\n'
        "4. Average horn size prediction for offspring (or null if not applicable)\n"
        "5. Confidence level (0.0 to 1.0)\n"
        "6. A detailed explanation of the herd's breeding potential, genetic diversity, and "
        "health considerations\n"
        "7. A recommended breeding strategy for this herd to optimize offspring quality"
        f"{strategy_suffix}"
    )


def parse_json_content(content: str | None) -> dict[str, Any]:
    """Parse a JSON object from model output, tolerating markdown code fences."""
    if not content or not content.strip():
        raise EnrichmentError("Empty response from OpenAI")
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        # Try to extract JSON if wrapped in markdown code blocks
        if "```json" in content:
            json_start = content.find("```json") + 7
        elif "```" in content:
            json_start = content.find("```") + 3
        else:
            raise EnrichmentError(f"Invalid JSON response from OpenAI: {content[:200]}") from e
        json_end = content.find("```", json_start)
        snippet = content[json_start:json_end if json_end != -1 else None].strip()
        try:
            data = json.loads(snippet)
        except json.JSONDecodeError as inner:
            raise EnrichmentError(
                f"Invalid JSON response from OpenAI: {content[:200]}"
            ) from inner
    if not isinstance(data, dict):
        raise EnrichmentError("OpenAI response is not a JSON object")
    return data


class OpenAIBreedingAdvisor(BreedingAdvisor):
    """Breeding advisor backed by the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str = "gpt-4o-mini",
        temperature: float = 0.3,
        client: Any | None = None,
    ):
        """Initialize the advisor with an API key or a preconfigured client."""
        if client is None:
            from openai import AsyncOpenAI

            client = AsyncOpenAI(api_key=api_key)
        self.client = client
        self.model = model
        self.temperature = temperature

    async def predict_offspring(self, request: PairPredictionRequest) -> dict[str, Any]:
        return await self._complete(BREEDING_PAIR_PROMPT, build_pair_prompt(request))

    async def analyze_herd(self, request: HerdAnalysisRequest) -> dict[str, Any]:
        return await self._complete(HERD_ANALYSIS_PROMPT, build_herd_prompt(request))

    async def _complete(self, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        """
        Run one JSON-mode chat completion.

        Raises:
            EnrichmentError: If the response is empty or not a JSON object
            Exception: For OpenAI API errors; the caller logs and recovers
        """
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            response_format={"type": "json_object"},
            max_tokens=1000,
            temperature=self.temperature,
        )
        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError) as resp_e:
            raise EnrichmentError("Malformed response from OpenAI") from resp_e
        return parse_json_content(content)
