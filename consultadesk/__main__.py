from consultadesk.app.main import main

raise SystemExit(main())
