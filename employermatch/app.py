import argparse
import json
from dataclasses import replace
from pathlib import Path
from typing import List

from .env import load_env

from . import __version__
from .config import MatchSettings, load_config
from .database import get_session, init_database
from .logger import get_logger
from .normalize import normalize_company, normalize_for_phonetic, normalized_key, tokenize
from .schema import load_pairs, validate_dataset_strict
from pipelines.entity_resolution.candidate_selector import build_blocking_index, find_candidates, generate_blocking_keys
from pipelines.entity_resolution.keys import KEY_GENERATORS
from pipelines.entity_resolution.minhash import WORD_SHINGLE_CONFIG
from pipelines.entity_resolution.resolver import hybrid_match_result, resolve_batch
from pipelines.entity_resolution.scoring import SIMILARITY_SCORERS
from pipelines.evaluation.evaluate import (
    BLOCKING_TARGETS,
    MATCH_TARGETS,
    error_analysis,
    format_report,
    grid_search_blocking,
    results_meeting_targets,
    run_evaluation,
)
from storage.repositories.companies import add_names, load_batch


def read_names(path: Path) -> List[str]:
    """One raw name per line; blank lines and # comments are skipped."""
    if not path.exists():
        raise SystemExit(f"Input file not found: {path}")
    names = []
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            name = line.rstrip("\r\n")
            if not name.strip() or name.lstrip().startswith("#"):
                continue
            names.append(name)
    return names


def _settings(args: argparse.Namespace) -> MatchSettings:
    settings = load_config()
    minhash = settings.minhash
    if getattr(args, "preset", None) == "words":
        minhash = WORD_SHINGLE_CONFIG
    if getattr(args, "num_hashes", None):
        minhash = replace(minhash, num_hashes=args.num_hashes)
    if getattr(args, "bands", None):
        minhash = replace(minhash, bands=args.bands)
    threshold = settings.jaro_threshold
    if getattr(args, "threshold", None) is not None:
        threshold = args.threshold
    return replace(settings, minhash=minhash, jaro_threshold=threshold)


def _batch_names(args: argparse.Namespace) -> List[str]:
    if args.input:
        return read_names(Path(args.input))
    db_path = Path(args.db)
    if not db_path.exists():
        raise SystemExit(f"Database not found: {db_path}")
    session = get_session(db_path)
    try:
        return load_batch(session, source=args.source)
    finally:
        session.close()


def cmd_normalize(args: argparse.Namespace) -> None:
    print(f"Normalized: {normalize_company(args.name)}")
    print(f"Phonetic:   {normalize_for_phonetic(args.name)}")
    print(f"Tokens:     {tokenize(args.name)}")
    print(f"Key:        {normalized_key(args.name)}")


def cmd_keys(args: argparse.Namespace) -> None:
    settings = _settings(args)
    for generator in KEY_GENERATORS:
        print(f"{generator.name:<18} {generator.generate_key(args.name)!r}")
    keys = generate_blocking_keys(args.name, settings.minhash)
    print(f"Blocking keys ({len(keys)}):")
    for key in keys:
        print(f" - {key}")


def cmd_compare(args: argparse.Namespace) -> None:
    settings = _settings(args)
    for scorer in SIMILARITY_SCORERS:
        print(f"{scorer.name:<18} {scorer.compare(args.a, args.b):.3f}")
    result = hybrid_match_result(args.a, args.b, settings.jaro_threshold)
    print(f"Keys: {result.key_a!r} vs {result.key_b!r}")
    print(f"Hybrid match @{settings.jaro_threshold}: {'yes' if result.is_match else 'no'}")


def cmd_candidates(args: argparse.Namespace) -> None:
    settings = _settings(args)
    names = _batch_names(args)
    if not names:
        print("No names found.")
        return
    index = build_blocking_index(names, settings.minhash)
    queries = [args.name] if args.name else names
    for name in queries:
        candidates = sorted(find_candidates(name, index, settings.minhash))
        print(f"{name}: {len(candidates)} candidates")
        for candidate in candidates:
            print(f"  - {candidate}")


def cmd_resolve(args: argparse.Namespace) -> None:
    settings = _settings(args)
    names = _batch_names(args)
    matches = resolve_batch(names, settings.minhash, settings.jaro_threshold)
    if args.json:
        print(json.dumps([m.to_dict() for m in matches], indent=2, ensure_ascii=False))
        return
    for m in matches:
        print(f"[match] {m.name_a} <-> {m.name_b} (jaro={m.score:.3f}, keys={m.key_a!r}/{m.key_b!r})")
    print(f"Done. names={len(set(names))} matches={len(matches)}")
    get_logger().log_metrics_summary()


def _print_errors(result, limit: int) -> None:
    print(f"\nErrors for {result.label}:")
    errors = error_analysis(result, limit=limit)
    if not errors["false_negatives"] and not errors["false_positives"]:
        print("  No errors!")
        return
    for kind, outcomes in errors.items():
        for o in outcomes:
            if o.shared_keys is not None:
                extra = f"shared_keys={o.shared_keys}, est_similarity={o.score:.3f}"
            elif o.score is not None:
                extra = f"score={o.score:.3f}"
            else:
                extra = f"keys: {o.key_a!r} vs {o.key_b!r}"
            print(f"  [{kind}] {o.pair[0]!r} <-> {o.pair[1]!r} ({extra})")
            print(f"      normalized: {normalize_company(o.pair[0])!r} <-> {normalize_company(o.pair[1])!r}")


def _print_targets(results, targets, noun: str) -> list:
    precision, recall = targets
    passing = results_meeting_targets(results, targets)
    print(f"\n{len(passing)} {noun} meet targets (>={precision:.0%} precision, >={recall:.0%} recall)")
    for r in passing:
        print(f"  - {r.label}: P={r.precision:.1%} R={r.recall:.1%} F1={r.f1_score:.1%}")
    return passing


def cmd_evaluate(args: argparse.Namespace) -> None:
    input_path = Path(args.dataset)
    if not input_path.exists():
        raise SystemExit(f"Dataset not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    is_valid, errors = validate_dataset_strict(data)
    if not is_valid:
        print("Invalid dataset:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)

    true_matches, true_non_matches = load_pairs(data)
    print(f"Loaded {len(true_matches)} true match pairs, {len(true_non_matches)} true non-match pairs")

    results = run_evaluation(true_matches, true_non_matches)
    print(format_report(results[:args.top], "MATCHING STRATEGIES (by F1)"))
    _print_targets(results, MATCH_TARGETS, "strategies")

    if results and args.errors:
        _print_errors(results[0], args.errors)

    if args.blocking:
        blocking = grid_search_blocking(true_matches, true_non_matches)
        print()
        print(format_report(blocking, "MINHASH LSH BLOCKING (word shingles)"))
        passing = _print_targets(blocking, BLOCKING_TARGETS, "configs")
        if passing:
            best = passing[0]
            print(f"\nBest blocking config: num_hashes={best.config.num_hashes}, bands={best.config.bands}")
        if blocking and args.errors:
            _print_errors(passing[0] if passing else blocking[0], args.errors)


def cmd_ingest(args: argparse.Namespace) -> None:
    names = read_names(Path(args.input))
    db_path = Path(args.db)
    init_database(db_path)
    session = get_session(db_path)
    try:
        inserted = add_names(session, names, args.source)
    finally:
        session.close()
    print(f"Done. read={len(names)} inserted={inserted}")


def _add_blocking_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--preset", choices=["default", "words"], help="Blocking preset: default (128h/16b) or words (64h/32b)")
    p.add_argument("--num-hashes", type=int, help="Signature length (overrides MATCH_NUM_HASHES)")
    p.add_argument("--bands", type=int, help="Number of LSH bands (overrides MATCH_BANDS)")


def _add_batch_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--input", help="Text file with one company name per line")
    p.add_argument("--db", default="data/companies.db", help="SQLite database with scraped names (default: data/companies.db)")
    p.add_argument("--source", help="Only names from this source (database input only)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="employermatch", description="Company name entity resolution")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")

    nrm = subparsers.add_parser("normalize", help="Show the normalized forms of a company name")
    nrm.add_argument("name", help="Raw company name")
    nrm.set_defaults(func=cmd_normalize)

    kys = subparsers.add_parser("keys", help="Show every key generator's key and the blocking keys for a name")
    kys.add_argument("name", help="Raw company name")
    _add_blocking_options(kys)
    kys.set_defaults(func=cmd_keys)

    cmp_ = subparsers.add_parser("compare", help="Score two names with every scorer and the hybrid rule")
    cmp_.add_argument("a", help="First company name")
    cmp_.add_argument("b", help="Second company name")
    cmp_.add_argument("--threshold", type=float, help="Jaro-Winkler threshold for the hybrid rule (default 0.85)")
    cmp_.set_defaults(func=cmd_compare)

    cnd = subparsers.add_parser("candidates", help="Build a blocking index over a batch and list candidates")
    _add_batch_options(cnd)
    _add_blocking_options(cnd)
    cnd.add_argument("--name", help="Query a single name instead of every name in the batch")
    cnd.set_defaults(func=cmd_candidates)

    res = subparsers.add_parser("resolve", help="Find matching name pairs in a batch")
    _add_batch_options(res)
    _add_blocking_options(res)
    res.add_argument("--threshold", type=float, help="Jaro-Winkler threshold for the hybrid rule (default 0.85)")
    res.add_argument("--json", action="store_true", help="Print match results as JSON")
    res.set_defaults(func=cmd_resolve)

    evl = subparsers.add_parser("evaluate", help="Evaluate all strategies on a labeled pairs JSON dataset")
    evl.add_argument("--dataset", required=True, help="Path to labeled pairs JSON")
    evl.add_argument("--top", type=int, default=20, help="Number of results to show (default 20)")
    evl.add_argument("--errors", type=int, default=10, help="Misclassified pairs to show for the best strategy (0 = none)")
    evl.add_argument("--blocking", action="store_true", help="Also grid-search MinHash blocking configurations")
    evl.set_defaults(func=cmd_evaluate)

    ing = subparsers.add_parser("ingest", help="Store raw company names from a file into SQLite")
    ing.add_argument("--input", required=True, help="Text file with one company name per line")
    ing.add_argument("--source", default="manual", help="Source label for these names (default: manual)")
    ing.add_argument("--db", default="data/companies.db", help="SQLite database (default: data/companies.db)")
    ing.set_defaults(func=cmd_ingest)

    return parser


def main(argv=None):
    # Load .env if present (MATCH_NUM_HASHES, MATCH_BANDS, MATCH_LOG_LEVEL, ...)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    try:
        settings = load_config()
    except ValueError as e:
        raise SystemExit(f"Invalid configuration: {e}")
    get_logger(level=settings.log_level)

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
