#!/usr/bin/env python3
"""
Demo script for the LLM vector cache.

Runs entirely in memory with a static provider, so neither Redis nor an API
key is needed. Set STORE_BACKEND=redis and OPENAI_API_KEY (or OLLAMA_BASE_URL)
and pass --live to go through the configured stack instead.
"""

import asyncio
import sys

from llm_vector_cache.config import setup_logging
from llm_vector_cache.repositories import MemoryEntryRepository, StaticProvider
from llm_vector_cache.services import LlmService, ProviderService, SemanticCacheService, create_llm_service


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def build_demo_service() -> LlmService:
    # Paraphrases share a direction; unrelated questions point elsewhere
    provider = StaticProvider(
        name="demo",
        dimension=3,
        vectors={
            "What is a semantic cache?": [1.0, 0.0, 0.0],
            "Explain semantic caching": [0.97, 0.243, 0.0],
            "How does cosine similarity work?": [0.0, 1.0, 0.0],
            "What is machine learning?": [0.0, 0.0, 1.0],
        },
        completion="A cache keyed by meaning rather than exact text.",
    )
    providers = ProviderService([provider], active_provider_name="demo")
    cache = SemanticCacheService(
        store=MemoryEntryRepository(),
        providers=providers,
        similarity_threshold=0.95,
        ttl=3600,
        key_prefix="demo:",
    )
    return LlmService(cache=cache, providers=providers)


async def demo_generate(service: LlmService) -> None:
    """Send a few prompts and show which ones hit the cache."""
    print_section("Generate with cache")

    prompts = [
        "What is a semantic cache?",
        "What is a semantic cache?",
        "Explain semantic caching",
        "How does cosine similarity work?",
    ]
    for prompt in prompts:
        match = await service.cache.find_match(prompt)
        response = await service.generate_response(prompt)
        if match is None:
            print(f"\n  Query: {prompt}\n  ✗ MISS, generated: {response[:60]}")
        else:
            print(f"\n  Query: {prompt}\n  ✓ {match.match_type.upper()} HIT ({match.similarity:.2%})")


async def demo_stats(service: LlmService) -> None:
    """Show aggregate counters."""
    print_section("Statistics")

    stats = await service.get_statistics()
    for key, value in stats.to_dict().items():
        print(f"  {key}: {value}")


async def main() -> int:
    """Run all demos."""
    setup_logging()
    live = "--live" in sys.argv[1:]
    service = create_llm_service() if live else build_demo_service()

    print("\n🚀 LLM Vector Cache Demo")
    try:
        await demo_generate(service)
        await demo_stats(service)
    finally:
        await service.close()

    print("\n✅ Demo completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
