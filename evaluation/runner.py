from time import time

from breakdown_resolver.ids import SequentialIdGenerator


def run_evaluation(resolver, eval_cases):
    results = []

    for case in eval_cases:
        start = time()
        result = resolver.resolve_category(
            case["category"],
            case["items"],
            case.get("scenes") or None,
            id_generator=SequentialIdGenerator(),
        )
        latency_ms = int((time() - start) * 1000)

        results.append({
            "id": case["id"],
            "category": case["category"],
            "groups": [list(group.variants) for group in result.groups],
            "parents": [group.parent_name for group in result.groups],
            "emitted": result.all_items(),
            "excluded": list(result.excluded),
            "latency_ms": latency_ms,
        })

    return results
