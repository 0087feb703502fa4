from content_wizard.cli.wizard import main

raise SystemExit(main())
