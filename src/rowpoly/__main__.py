from rowpoly.cli.app import main

main()
