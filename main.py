import sys

from loguru import logger

from rolecheck import RolecheckError, check_permission, find_roles
from rolecheck.config import load_grants

USAGE = (
    "Usage: python main.py <grants.json> check <permission> [role ...]\n"
    "       python main.py <grants.json> roles <permission>"
)


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 3 or args[1] not in ("check", "roles"):
        logger.error(USAGE)
        return 2

    grants_path, command, permission = args[0], args[1], args[2]

    try:
        grants = load_grants(grants_path)
    except FileNotFoundError:
        logger.error(f"Grants file {grants_path} does not exist")
        return 2
    except RolecheckError as e:
        logger.error(f"Cannot load grants: {e}")
        return 2

    if command == "roles":
        roles = find_roles(grants, permission)
        if roles:
            logger.success(f"{permission} is granted by: {', '.join(roles)}")
        else:
            logger.warning(f"No role grants {permission}")
        print("\n".join(roles))
        return 0

    roles = args[3:]
    if check_permission(grants, roles, permission):
        logger.success(f"GRANTED {permission} to [{', '.join(roles)}]")
        return 0

    required = find_roles(grants, permission)
    logger.error(
        f"DENIED {permission} to [{', '.join(roles)}]; "
        f"requires one of: {', '.join(required) or 'none'}"
    )
    return 1


if __name__ == "__main__":
    sys.exit(main())
