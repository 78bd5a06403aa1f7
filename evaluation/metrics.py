from itertools import combinations


def _pairs(groups):
    pairs = set()
    for variants in groups:
        keys = sorted({v.casefold() for v in variants})
        pairs.update(combinations(keys, 2))
    return pairs


def _covered(case, result):
    emitted = sorted(item.casefold() for item in result["emitted"] + result["excluded"])
    expected = sorted({item.casefold() for item in case["items"]})
    return emitted == expected


def calculate_metrics(results, eval_cases):
    case_map = {c["id"]: c for c in eval_cases}

    true_pairs = 0
    predicted_pairs = 0
    gold_pairs = 0
    parents_correct = 0
    coverage_ok = 0

    for r in results:
        expected = case_map[r["id"]]

        predicted = _pairs(r["groups"])
        gold = _pairs(expected["expected_groups"])
        true_pairs += len(predicted & gold)
        predicted_pairs += len(predicted)
        gold_pairs += len(gold)

        if sorted(r["parents"]) == sorted(expected["expected_parents"]):
            parents_correct += 1
        if _covered(expected, r):
            coverage_ok += 1

    total = len(results)
    return {
        "merge_precision": true_pairs / predicted_pairs if predicted_pairs else 1.0,
        "merge_recall": true_pairs / gold_pairs if gold_pairs else 1.0,
        "parent_name_accuracy": parents_correct / total if total else 1.0,
        "coverage_rate": coverage_ok / total if total else 1.0,
        "total_cases": total,
    }
