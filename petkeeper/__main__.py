"""Entry point for ``python -m petkeeper <command>``.

Commands:
    doctor     – check Python, deps, pet catalog and database
    serve      – run the inventory API with uvicorn
    migrate    – apply SQL migrations to the inventory database
    catalog    – print the pet catalog
    inventory  – show or change a player's inventory through a running API
"""
from petkeeper.cli import main

if __name__ == "__main__":
    main()
