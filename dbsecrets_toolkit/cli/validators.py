"""Input validation for CLI arguments."""
import re
import sys

ENV_VAR_PATTERN = r'^[A-Za-z_][A-Za-z0-9_]*$'
# Secret names allow letters, digits and /_+=.@- ; ARNs add ':'
SECRET_ID_PATTERN = r'^[A-Za-z0-9/_+=.@:-]{1,2048}$'


def validate_env_var_name(name: str) -> None:
    """
    Validate an environment variable name.

    Args:
        name: Variable name to validate

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not name:
        print("Error: Environment variable name cannot be empty", file=sys.stderr)
        sys.exit(2)

    if not re.match(ENV_VAR_PATTERN, name):
        print(f"Error: Invalid environment variable name '{name}'", file=sys.stderr)
        print("\nNames must start with a letter or underscore and contain only", file=sys.stderr)
        print("letters, numbers and underscores (e.g. DB_SECRET_NAME)", file=sys.stderr)
        sys.exit(2)


def validate_secret_id(secret_id: str, env_var: str) -> None:
    """
    Validate the secret id read from an environment variable.

    Args:
        secret_id: Secret name or ARN
        env_var: Variable it was read from, for the error message

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not secret_id:
        print(f"Error: Environment variable '{env_var}' is not set or empty", file=sys.stderr)
        print(f"\nSet it to the secret name or ARN, e.g. export {env_var}=prod/app/db", file=sys.stderr)
        sys.exit(2)

    if not re.match(SECRET_ID_PATTERN, secret_id):
        print(f"Error: Invalid secret id '{secret_id}' in ${env_var}", file=sys.stderr)
        print("\nAllowed characters: letters, numbers and / _ + = . @ - (and : in ARNs)", file=sys.stderr)
        sys.exit(2)
