import sys
import os
import json
import logging
import traceback
from PyQt5.QtCore import QCoreApplication
from system import setup_system, StreamToLogger, ConfigManager
import constants


def exception_hook(exctype, value, tb):
    err_msg = "".join(traceback.format_exception(exctype, value, tb))
    logging.getLogger(constants.LOGGER_NAME).critical(f"CORE CRASH DETECTED:\n{err_msg}")
    sys.__excepthook__(exctype, value, tb)


def load_project_data(path):
    from initial_data import build_initial_project
    if not path:
        return build_initial_project()
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def main(argv):
    base_dir = os.path.dirname(os.path.abspath(__file__))
    config = ConfigManager(os.path.join(base_dir, "config", "Track_Editor.conf"))
    logger = setup_system(base_dir, getattr(logging, str(config.get('log_level')).upper(), logging.DEBUG))
    sys.stdout = StreamToLogger(logger, logging.INFO)
    sys.stderr = StreamToLogger(logger, logging.ERROR)
    logger.info("=== Booting Track Editor ===")
    app = QCoreApplication.instance() or QCoreApplication(argv)
    from editor_session import EditorSession
    project_path = argv[1] if len(argv) > 1 else None
    try:
        session = EditorSession(load_project_data(project_path), config, auto_tick=True)
    except (OSError, ValueError) as e:
        logger.critical(f"Failed to load project {project_path}: {e}", exc_info=True)
        return 1
    session.playback.state_changed.connect(lambda playing: None if playing else app.quit())
    session.playback.play()
    logger.info("Starting event loop...")
    app.exec_()
    logger.info(f"Playback finished at {session.playback.current_time:.3f}s")
    return 0


if __name__ == "__main__":
    sys.excepthook = exception_hook
    sys.exit(main(sys.argv))
