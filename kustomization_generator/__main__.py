"""Run the kustomization-generator command line tool."""

from .tool.kustomization_generator import main

if __name__ == "__main__":
    main()
