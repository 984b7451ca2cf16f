from bindjar.cli import main

raise SystemExit(main())
