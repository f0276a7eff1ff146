"""Benchmark token counting on a slice of the Sci-Fi Gutenberg dataset.

Compares greedy segmentation against the character estimate and reports:
  Documents | Vocab Size | Load Time | Counting Throughput |
  Greedy Tokens | Estimated Tokens | Estimate Error
"""

import argparse
import time
from pathlib import Path

from datasets import load_dataset

from sptok import TaskPrompt, TokenCounter, approximate_count, from_pretrained

HF_DATASET = "stevez80/Sci-Fi-Books-gutenberg"


def load_corpus(num_docs: int | None) -> list[str]:
    """Load up to `num_docs` documents via dataset indexing; full dataset when None."""
    print(f"Loading {HF_DATASET} (non-streaming) …")
    ds = load_dataset(HF_DATASET, split="train")
    if num_docs is not None:
        return ds[:num_docs]["text"]
    return ds["text"]


def main() -> None:
    """Run the counting benchmark and print a summary row."""
    parser = argparse.ArgumentParser(
        description="Benchmark sptok greedy counting against the character estimate."
    )
    parser.add_argument("model", type=Path, help="Path to a sentencepiece.model file.")
    parser.add_argument(
        "--num-docs",
        type=int,
        default=1_000,
        help="Number of documents to count (default: 1000).",
    )
    parser.add_argument(
        "--prompt",
        choices=[p.name.lower() for p in TaskPrompt],
        default=None,
        help="Prepend a task prompt to every document.",
    )
    args = parser.parse_args()

    start = time.perf_counter()
    tokenizer = from_pretrained(args.model)
    load_s = time.perf_counter() - start
    vocab_size = tokenizer.vocab_size()
    if not tokenizer.is_usable():
        print("warning: model did not parse, counts below are estimates")

    docs = load_corpus(args.num_docs)
    total_chars = sum(len(d) for d in docs)
    prompt = TaskPrompt.get(args.prompt) if args.prompt else TaskPrompt.DOCUMENT

    with TokenCounter(tokenizer) as counter:
        start = time.perf_counter()
        counts = counter.count_tokens_batch(
            docs, with_prompt=args.prompt is not None, prompt=prompt
        )
        count_s = time.perf_counter() - start

    greedy_total = sum(counts)
    estimated_total = sum(
        approximate_count(prompt.apply(d) if args.prompt else d) for d in docs
    )
    error = (estimated_total - greedy_total) / greedy_total if greedy_total else 0.0

    print(
        f"| {len(docs):,} docs | {vocab_size:,} | {load_s * 1000:.1f} ms "
        f"| {total_chars / max(count_s, 1e-9) / 1e6:.2f} Mchar/s | {greedy_total:,} "
        f"| {estimated_total:,} | {error:+.1%} |"
    )


if __name__ == "__main__":
    main()
