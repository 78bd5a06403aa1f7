import logging

from breakdown_resolver.config import ResolverConfig
from breakdown_resolver.resolver import EntityResolver
from evaluation.cases import EVAL_CASES
from evaluation.metrics import calculate_metrics
from evaluation.runner import run_evaluation

logging.basicConfig(level=logging.WARNING)

# Step 1: Evaluation config (deterministic ids)
config = ResolverConfig(id_strategy="sequential")

# Step 2: Create resolver
resolver = EntityResolver(config)

# Step 3: Run labelled cases
results = run_evaluation(resolver, EVAL_CASES)

for r in results:
    print(f"Case: {r['id']} ({r['category']})")
    print("Groups:", r["groups"])
    print("Parents:", r["parents"])
    print("-" * 50)

# Step 4: Aggregate metrics
metrics = calculate_metrics(results, EVAL_CASES)
for name, value in metrics.items():
    print(f"{name}: {value}")
