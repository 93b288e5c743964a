import argparse
import logging
import sys

from lecturegrid.config import RunConfig, load_config
from lecturegrid.errors import ConfigurationError, ValidationError
from lecturegrid.io_utils import load_courses, load_unavailability, save_schedule_csv, save_unassigned_csv
from lecturegrid.render import timetable_frame
from lecturegrid.scheduling.engine import schedule_courses
from lecturegrid.scheduling.evaluation import summary


def build_config(args) -> RunConfig:
    cfg = load_config(args.config, required=True) if args.config else RunConfig()
    for name in ('days', 'rooms', 'periods_per_day', 'slot_budget'):
        value = getattr(args, name)
        if value is not None:
            setattr(cfg, name, value)
    return cfg.validate()


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="LectureGrid – greedy lecture timetabling")
    # Inputs
    p.add_argument('--courses', type=str, required=True, help='courses.csv with course,teacher,section[,lectures][,slots]')
    p.add_argument('--unavailability', type=str, help='Optional CSV teacher,slots')

    # Grid
    p.add_argument('--config', type=str, help='YAML file with days/rooms/periods_per_day/slot_budget')
    p.add_argument('--days', type=int, default=None, help='Teaching days per week (1-7)')
    p.add_argument('--rooms', type=int, default=None, help='Max courses per slot (default unlimited)')
    p.add_argument('--periods-per-day', dest='periods_per_day', type=int, default=None)
    p.add_argument('--slot-budget', dest='slot_budget', type=int, default=None,
                   help='Total slots split across days when --periods-per-day is not given')

    # Output
    p.add_argument('--out_schedule', type=str, default='schedule.csv')
    p.add_argument('--out_grid', type=str, default=None, help='Optional timetable grid CSV')
    p.add_argument('--out_unassigned', type=str, default=None)
    p.add_argument('--log-level', dest='log_level', default='WARNING')
    args = p.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        cfg = build_config(args)
        courses = load_courses(args.courses)
        unavail = load_unavailability(args.unavailability) if args.unavailability else None
        result = schedule_courses(courses, cfg, unavail)
    except (ConfigurationError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(summary(result.graph, courses, cfg, result, unavail))
    if result.error:
        print(f"Error: {result.error}", file=sys.stderr)
    for c in result.unassigned:
        print(f"Unassigned: {c.name} ({c.teacher})")

    # Save CSVs
    save_schedule_csv(args.out_schedule, result)
    saved = [args.out_schedule]
    if args.out_grid:
        timetable_frame(result, cfg.days).to_csv(args.out_grid)
        saved.append(args.out_grid)
    if args.out_unassigned:
        save_unassigned_csv(args.out_unassigned, result)
        saved.append(args.out_unassigned)
    print(f"Saved: {', '.join(saved)}")
    return 1 if result.error else 0


if __name__ == '__main__':
    sys.exit(main())
