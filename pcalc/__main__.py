from pcalc.main import main

main()
