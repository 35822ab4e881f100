from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Model config store (Elasticsearch)")
    ap.add_argument("--url", default=None, help="Store base URL; defaults to $MODEL_STORE_URL")
    ap.add_argument("--write-index", default=None, help="Defaults to $MODEL_STORE_WRITE_INDEX")
    ap.add_argument("--index-pattern", default=None, help="Defaults to $MODEL_STORE_INDEX_PATTERN")
    ap.add_argument("--timeout", type=float, default=None, help="Seconds to wait for each operation")
    sub = ap.add_subparsers(dest="cmd", required=True)

    # Create a config from a JSON document (fails if the ID already exists)
    st = sub.add_parser("store")
    st.add_argument("--file", required=True, help="Path to a JSON model config, or '-' for stdin")

    add_subparser(sub, "get")
    add_subparser(sub, "delete")

    return ap


def add_subparser(sub, name):
    """
    Adds a subcommand that addresses a single model config by ID.

    Args:
        sub: The subparsers object from argparse.
        name: The name of the subcommand to add.

    Returns:
        argparse.ArgumentParser: The configured subparser.
    """
    result = sub.add_parser(name)
    result.add_argument("--model-id", required=True)
    return result
