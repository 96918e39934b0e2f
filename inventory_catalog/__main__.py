from inventory_catalog.cli import main

main()
