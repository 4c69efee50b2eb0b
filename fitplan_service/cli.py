from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence

import structlog

from .client import GENERATION_STAGES, FileSnapshotStore, FitPlanApiClient, PlanOrchestrator, PlanStep
from .config import settings
from .logging_config import configure_logging
from .schemas.plans import UserPlan

logger = structlog.get_logger(__name__)


class ConsoleNotifier:
    def success(self, message: str) -> None:
        print(f"[ok] {message}")

    def error(self, message: str) -> None:
        print(f"[error] {message}", file=sys.stderr)


def render_plan(plan: UserPlan) -> str:
    lines = [
        f"Weight loss goal: {plan.weight_goal_kg:g} kg",
        f"Created: {plan.created_at.isoformat()}",
        "",
        "Analysis:",
        f"  {plan.current_analysis}",
        "",
        "== Workout plan ==",
    ]
    for day in plan.workout_plan.weekly_schedule:
        lines.append(day.day)
        for exercise in day.exercises:
            lines.append(f"  - {exercise.name}: {exercise.sets} | {exercise.reps} | {exercise.rest}")
    if plan.workout_plan.tips:
        lines.append("Tips:")
        lines.extend(f"  * {tip}" for tip in plan.workout_plan.tips)

    lines += ["", f"== Meal plan ({plan.meal_plan.daily_calories} kcal/day) =="]
    for meal in plan.meal_plan.meals:
        lines.append(f"{meal.time} {meal.name} ({meal.calories} kcal)")
        lines.extend(f"  - {food}" for food in meal.foods)
    if plan.meal_plan.tips:
        lines.append("Tips:")
        lines.extend(f"  * {tip}" for tip in plan.meal_plan.tips)
    return "\n".join(lines)


def _store() -> FileSnapshotStore:
    return FileSnapshotStore(settings.snapshot_path)


async def _generate(args: argparse.Namespace) -> int:
    notifier = ConsoleNotifier()
    async with FitPlanApiClient(args.api_url) as api:
        orchestrator = PlanOrchestrator(api, _store(), notifier)
        if orchestrator.step == PlanStep.RESULTS:
            if not args.replace:
                notifier.error("A saved plan already exists. Run 'fitplan reset' or pass --replace.")
                return 1
            orchestrator.reset()

        if orchestrator.select_photo(args.photo) is None:
            return 1
        orchestrator.set_weight_goal(args.goal)
        if not orchestrator.can_submit:
            notifier.error("Please upload a photo and set your weight goal")
            return 1

        for stage in GENERATION_STAGES:
            print(f"... {stage}")
        plan = await orchestrator.submit()

    if plan is None:
        return 1
    print(render_plan(plan))
    return 0


def _show(args: argparse.Namespace) -> int:
    plan = _store().load()
    if plan is None:
        print("No saved plan.")
        return 1
    print(render_plan(plan))
    return 0


def _reset(args: argparse.Namespace) -> int:
    _store().clear()
    print("Saved plan removed.")
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("fitplan_service.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fitplan", description="AI workout and meal plans from a body photo")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="upload a photo and a weight-loss goal")
    gen.add_argument("--photo", required=True, help="path to a body photo (max 5MB)")
    gen.add_argument("--goal", required=True, help="kilograms to lose, 0 < goal <= 50")
    gen.add_argument("--api-url", default=None, help="fitplan-service base URL")
    gen.add_argument("--replace", action="store_true", help="discard the saved plan first")
    gen.set_defaults(handler=lambda a: asyncio.run(_generate(a)))

    show = sub.add_parser("show", help="print the saved plan")
    show.set_defaults(handler=_show)

    reset = sub.add_parser("reset", help="delete the saved plan")
    reset.set_defaults(handler=_reset)

    serve = sub.add_parser("serve", help="run the HTTP service")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(handler=_serve)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command != "serve":
        configure_logging("fitplan-client", stream=sys.stderr)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
