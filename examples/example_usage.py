"""Use the service layer directly, without Flask.

Prints each project's team with the effective role of every member.
"""

import importlib
import logging

from config import get_settings_module

from src.company_ops.company_ops.container import build_container

logger = logging.getLogger("examples.example_usage")


def main():
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    for project in container.project_service.list_projects():
        logger.info("%s (%s)", project.name, project.status.value)
        for member in container.project_service.team_members(project.name):
            logger.info("  %-20s %-8s %s", member["name"], member["type"], member["role"])


if __name__ == "__main__":
    main()
