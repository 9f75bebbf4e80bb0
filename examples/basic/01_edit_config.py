"""
01_edit_config.py - Creating, editing and saving a cargo-runner.toml

This example demonstrates:
- Writing the built-in default configuration to a workspace
- Adding a variant, linking a pre_command and making it the default
- Handling rejected edits
- Editing under a ConfigStore transaction

Try it:
    python examples/basic/01_edit_config.py
"""

import tempfile

from cargo_runner import (
    CommandDetails,
    Config,
    ConfigContext,
    ConfigStore,
    InvalidPreCommandError,
    dump_config,
    setup_logging,
)


def main():
    setup_logging(level="DEBUG", format_string="[%(levelname)s] %(name)s: %(message)s")

    with tempfile.TemporaryDirectory() as workspace:
        context = ConfigContext.for_workspace(workspace)

        # Step 1: Start from the built-in defaults and save them
        config = Config()
        config.save(context)
        print(f"Wrote defaults to {context.default_path.name}")

        # Step 2: Add a release variant that builds first
        config.update_config("run", "release", CommandDetails(command_type="cargo", command="run"))
        config.update_params("run", "release", "--release")
        config.update_pre_command("run", "release", "default")
        config.set_default_config("run", "release")

        # Step 3: Invalid links are rejected and leave the config unchanged
        try:
            config.update_pre_command("run", "release", "release")
        except InvalidPreCommandError as e:
            print(f"Rejected: {e}")

        config.save(context)

        # Step 4: Edit under a lock, saved when the block exits
        store = ConfigStore(context)
        with store.transaction() as locked:
            locked.update_config("script", "fmt", CommandDetails(command="cargo fmt --all"))
            locked.set_default_config("script", "fmt")

        print("\nFinal cargo-runner.toml:\n")
        print(dump_config(store.config))


if __name__ == "__main__":
    main()
