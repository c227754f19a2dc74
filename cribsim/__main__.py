from cribsim.benchmark import main

raise SystemExit(main())
