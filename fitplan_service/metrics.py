from prometheus_client import Counter

PLANS_GENERATED_TOTAL = Counter(
    "fitplan_plans_generated_total",
    "Number of fitness plans assembled by fitplan-service",
)

PLAN_GENERATION_FAILURES_TOTAL = Counter(
    "fitplan_plan_generation_failures_total",
    "Number of plan-generation requests that failed",
    ["stage"],
)

MODEL_CALLS_TOTAL = Counter(
    "fitplan_model_calls_total",
    "Number of completion calls issued to the model provider",
    ["stage"],
)
