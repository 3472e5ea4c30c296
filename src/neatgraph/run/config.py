import configparser
import os
from neatgraph.activations import activations

class Config:

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config with default values.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config populated with defaults,
                         suitable for manual attribute setting.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.activation_initial = 'sigmoid'
            self.bias_init_mean     = 0.0
            self.bias_init_stdev    = 0.0

            self.weight_init_mean        = 0.0
            self.weight_init_stdev       = 1.0
            self.min_weight              = -30.0
            self.max_weight              = 30.0
            self.weight_replace_prob     = 0.1
            self.weight_perturb_prob     = 0.8
            self.weight_perturb_strength = 0.5

            self.allow_recurrent                = False
            self.node_add_probability           = 0.2
            self.connection_add_probability     = 0.5
            self.connection_enable_probability  = 0.01
            self.connection_disable_probability = 0.01

            self.num_jobs = 1
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [NODE]

        # Activation function for hidden and output nodes.
        # Options: see 'basic_activations.py'.
        self.activation_initial = get_value('NODE', 'activation_initial', str, default='sigmoid')
        if self.activation_initial not in activations:
            raise ValueError(f"Invalid activation function '{self.activation_initial}' in activation_initial")

        # The mean and standard deviation of the normal distribution
        # used to initialize the 'bias' parameter of new hidden nodes.
        # A zero standard deviation gives every new node the mean bias.
        self.bias_init_mean  = get_value('NODE', 'bias_init_mean' , float, default=0.0)
        self.bias_init_stdev = get_value('NODE', 'bias_init_stdev', float, default=0.0)

        # [CONNECTION]

        # The mean and standard deviation of the normal distribution
        # used to initialize the 'weight' parameter for new connections.
        self.weight_init_mean  = get_value('CONNECTION', 'weight_init_mean' , float, default=0.0)
        self.weight_init_stdev = get_value('CONNECTION', 'weight_init_stdev', float, default=1.0)

        # The minimum and maximum allowed 'weight' values.
        # Weights outside this range will be clamped to this range.
        self.min_weight = get_value('CONNECTION', 'min_weight', float, default=-30.0)
        self.max_weight = get_value('CONNECTION', 'max_weight', float, default=30.0)
        if self.min_weight > self.max_weight:
            raise ValueError(f"min_weight ({self.min_weight}) is greater than max_weight ({self.max_weight})")

        # The probability that mutation will replace the 'weight' of a connection
        # with a newly chosen random value (as if it were a new connection).
        self.weight_replace_prob = get_value('CONNECTION', 'weight_replace_prob', float, default=0.1)

        # The probability that mutation will change the 'weight'
        # of a connection by adding a random value.
        self.weight_perturb_prob = get_value('CONNECTION', 'weight_perturb_prob', float, default=0.8)

        # The standard deviation of the zero-centered normal distribution
        # from which a 'weight' perturbation value is drawn.
        self.weight_perturb_strength = get_value('CONNECTION', 'weight_perturb_strength', float, default=0.5)

        # [STRUCTURAL MUTATIONS]

        # Whether new connections may close a cycle in the network graph.
        # When 'False', candidate connections that would create a cycle are rejected
        # and the compiled network is a DAG. When 'True', the forward pass evaluates
        # recurrent connections using the source outputs of the previous pass.
        self.allow_recurrent = get_value('STRUCTURAL_MUTATIONS', 'allow_recurrent', bool, default=False)

        # The probability that mutation will add a new node (essentially replacing
        # an existing connection, the enabled status of which will be set to False).
        self.node_add_probability = get_value('STRUCTURAL_MUTATIONS', 'node_add_probability', float, default=0.2)

        # The probability that mutation will add a connection between existing nodes
        self.connection_add_probability = get_value('STRUCTURAL_MUTATIONS', 'connection_add_probability', float, default=0.5)

        # The probability that a mutation will enable a currently
        # disabled connection, or the other way around.
        self.connection_enable_probability  = get_value('STRUCTURAL_MUTATIONS', 'connection_enable_probability' , float, default=0.01)
        self.connection_disable_probability = get_value('STRUCTURAL_MUTATIONS', 'connection_disable_probability', float, default=0.01)

        # Every probability must lie in [0, 1]
        for name in ('weight_replace_prob',
                     'weight_perturb_prob',
                     'node_add_probability',
                     'connection_add_probability',
                     'connection_enable_probability',
                     'connection_disable_probability'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} ({value}) must be between 0 and 1")
        if self.weight_perturb_prob + self.weight_replace_prob > 1.0:
            raise ValueError(f"weight_perturb_prob ({self.weight_perturb_prob}) plus weight_replace_prob "
                             f"({self.weight_replace_prob}) is greater than 1")

        # [PARALLEL] (optional section)

        # Number of threads used when mutating many genomes at once.
        # All threads share the same innovation registry.
        self.num_jobs = get_value('PARALLEL', 'num_jobs', int, default=1)
