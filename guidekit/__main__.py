from guidekit.cli.main import main

raise SystemExit(main())
