from license_core.cli import main

raise SystemExit(main())
