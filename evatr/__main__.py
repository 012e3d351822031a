from evatr.cli import main

raise SystemExit(main())
