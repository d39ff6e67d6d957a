from babynames.cli import main

raise SystemExit(main())
