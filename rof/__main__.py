from rof.cli import main

main()
