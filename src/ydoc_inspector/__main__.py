from ydoc_inspector.cli import main

main()
