from crategen.cli import main

main()
