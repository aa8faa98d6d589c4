from model_inventory.cli import main

raise SystemExit(main())
