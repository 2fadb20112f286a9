from procexec.cli.cli import main

main()
