from kubeswitch.cli import main

main()
