from autobattle.main import main

raise SystemExit(main())
