"""Run entrypoint for demoshelf using the core factory."""

from demoshelf_core import create_app

app = create_app()


def main() -> None:
    """Run the development server."""
    app.run(debug=True, host="0.0.0.0", port=app.config["PORT"])


if __name__ == "__main__":
    main()
