from albumseq.main import main

main()
