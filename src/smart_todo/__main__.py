"""Entry point: ``python -m smart_todo`` or the ``smart-todo`` script."""

from smart_todo.cli.app import TodoCLIApp


def main() -> None:
    app = TodoCLIApp()
    app.run()


if __name__ == "__main__":
    main()
