"""Standalone window hosting the time control."""
import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from config_manager import config
from logging_config import setup_logging
from time_control_state import TimeControlState, parse_time
from ui.time_control_widget import TimeControlWidget

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Circular start/stop time picker')
    parser.add_argument('--start', default=None,
                        help='Initial start time as HH:MM (default: from config)')
    parser.add_argument('--stop', default=None,
                        help='Initial stop time as HH:MM (default: from config)')
    parser.add_argument('--debug', '-d', action='store_true',
                        help='Enable debug logging')
    return parser


def create_widget(args: argparse.Namespace) -> TimeControlWidget:
    """Build the widget, applying any times given on the command line."""
    state = TimeControlState.from_config(config)
    if args.start is not None:
        state.start_time = parse_time(args.start, state.start_time)
    if args.stop is not None:
        state.stop_time = parse_time(args.stop, state.stop_time)

    widget = TimeControlWidget(state=state)
    widget.setWindowTitle('Time Control')
    widget.duration_changed.connect(
        lambda duration: logger.info("Duration: %s", duration))
    return widget


def main():
    """Entry point for the time control window."""
    args = build_parser().parse_args()

    setup_logging()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    app = QApplication(sys.argv)
    widget = create_widget(args)
    widget.resize(widget.sizeHint())
    widget.show()
    logger.info("Time control started: %s - %s", widget.start_time, widget.stop_time)
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
