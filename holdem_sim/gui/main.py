"""Entry point for the Hold'em trainer GUI.

Usage:
    python -m holdem_sim.gui.main [--variant heads_up|three_handed] [-v]
"""

from __future__ import annotations

import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication

from holdem_sim.core.table_config import TableConfig
from holdem_sim.gui.main_window import MainWindow
from holdem_sim.gui.presenter import TablePresenter
from holdem_sim.gui.qt_scheduler import QtScheduler
from holdem_sim.gui.styles import APP_STYLESHEET
from holdem_sim.simulation.table_session import TableSession

VARIANTS = {
    "heads_up": TableConfig.heads_up,
    "three_handed": TableConfig.three_handed,
}


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Texas Hold'em against AI opponents.")
    parser.add_argument(
        "--variant",
        choices=sorted(VARIANTS),
        default="heads_up",
        help="heads_up: one MCTS opponent; three_handed: two rule-based opponents",
    )
    parser.add_argument("--iterations", type=int, default=None, help="MCTS iterations per decision")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log AI decisions")
    args, qt_args = parser.parse_known_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides = {} if args.iterations is None else {"mcts_iterations": args.iterations}
    config = VARIANTS[args.variant](**overrides)

    app = QApplication([sys.argv[0], *qt_args])
    app.setApplicationName("Hold'em Trainer")
    app.setStyleSheet(APP_STYLESHEET)

    window = MainWindow(config.num_players, config.human_seat)
    scheduler = QtScheduler()
    session = TableSession(config, scheduler)
    presenter = TablePresenter(view=window, session=session)

    # Wire UI signals to presenter
    bar = window.action_bar
    bar.fold_clicked.connect(presenter.on_fold_clicked)
    bar.check_clicked.connect(presenter.on_check_clicked)
    bar.call_clicked.connect(presenter.on_call_clicked)
    bar.raise_clicked.connect(presenter.on_raise_clicked)
    bar.all_in_clicked.connect(presenter.on_all_in_clicked)
    bar.next_hand_clicked.connect(presenter.on_next_hand_clicked)
    bar.new_game_clicked.connect(presenter.on_new_game_clicked)

    window.show()
    presenter.start()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
