from algoviz.cli import main

main()
