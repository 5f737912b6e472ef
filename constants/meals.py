"""
Curated Meal Ideas

Static list of Sunday dinner ideas that work for a mixed crowd of adults
and small children. Shown on its own and as the fallback whenever the
suggestion service returns nothing.
"""

CURATED_MEALS = [
    {
        'name': 'Build-Your-Own Taco Bar', 'emoji': '🌮', 'kid_score': 5,
        'prep_time': '45 min', 'difficulty': 'Easy',
        'desc': 'Ground beef, chicken, black beans. Kids love assembling their own. Keep toppings mild & separate.',
        'kid_tip': 'Let toddlers fill their own soft mini tortillas. Plain beans + shredded cheese always wins.',
        'tags': ['crowd-pleaser', 'customisable', 'hands-on'],
    },
    {
        'name': 'Pasta Bar - 3 Sauces', 'emoji': '🍝', 'kid_score': 5,
        'prep_time': '35 min', 'difficulty': 'Easy',
        'desc': 'Marinara, butter+parm, pesto. Tiny pasta shapes for little ones. Nearly zero stress.',
        'kid_tip': 'Serve ditali or small shells, easier for 1-3 year olds. Plain butter pasta = guaranteed clean plate.',
        'tags': ['kid-staple', 'vegetarian-option', 'easy'],
    },
    {
        'name': 'Sheet-Pan Chicken & Veg', 'emoji': '🍗', 'kid_score': 4,
        'prep_time': '1 hr', 'difficulty': 'Easy',
        'desc': 'Roast chicken thighs with carrots, potatoes, zucchini. Mild seasoning, one pan, minimal cleanup.',
        'kid_tip': 'Cut veg extra small and cook until very tender. Kids can pick their favourites.',
        'tags': ['one-pan', 'allergen-friendly', 'wholesome'],
    },
    {
        'name': 'Homemade Pizza Night', 'emoji': '🍕', 'kid_score': 5,
        'prep_time': '90 min', 'difficulty': 'Medium',
        'desc': 'Store-bought dough, kids decorate their own mini pizzas. Adults get gourmet toppings on the side.',
        'kid_tip': 'Give each kid a dough ball, pressing it flat is half the fun. Plain cheese mini pizzas are perfect.',
        'tags': ['activity', 'crowd-pleaser', 'fun'],
    },
    {
        'name': 'Slow-Cooker BBQ Pulled Pork', 'emoji': '🥩', 'kid_score': 4,
        'prep_time': '15 min active', 'difficulty': 'Easy',
        'desc': 'Set it in the morning. Soft slider buns perfect for toddler-sized portions.',
        'kid_tip': 'Shred pork very fine. Soft brioche slider buns are easy for little hands and mouths.',
        'tags': ['make-ahead', 'crowd-pleaser'],
    },
    {
        'name': 'Mac & Cheese (Two Ways)', 'emoji': '🧀', 'kid_score': 5,
        'prep_time': '40 min', 'difficulty': 'Easy',
        'desc': 'Classic stovetop for kids. Stir in fancy cheese, bacon, truffle oil for adults. Everyone wins.',
        'kid_tip': 'Make kid version first, scoop out, then elevate the pot for adults. No complaints guaranteed.',
        'tags': ['kid-staple', 'comfort', 'two-versions'],
    },
    {
        'name': 'Grilled Salmon + Rice', 'emoji': '🐟', 'kid_score': 3,
        'prep_time': '40 min', 'difficulty': 'Medium',
        'desc': 'Flaky baked salmon with plain rice for kids. Light, healthy and impressive for adults.',
        'kid_tip': 'Flake salmon thoroughly and check for bones. Plain rice with a little butter is very toddler-friendly.',
        'tags': ['healthy', 'omega-3'],
    },
    {
        'name': 'Meatball Sub Bar', 'emoji': '🥖', 'kid_score': 5,
        'prep_time': '50 min', 'difficulty': 'Medium',
        'desc': 'Bake meatballs ahead. Soft rolls, marinara, melted mozzarella. Kids do mini versions.',
        'kid_tip': 'Small meatballs cut in half avoid choking risk. Soft rolls help too.',
        'tags': ['make-ahead', 'crowd-pleaser', 'fun'],
    },
    {
        'name': 'Chicken Quesadillas + Guac', 'emoji': '🫔', 'kid_score': 5,
        'prep_time': '30 min', 'difficulty': 'Easy',
        'desc': 'Quick to make in batches. Cut into small triangles for little hands.',
        'kid_tip': 'Cut into thin triangles. Quesadillas are ideal finger food for toddlers, they love the crunch.',
        'tags': ['quick', 'kid-staple', 'customisable'],
    },
    {
        'name': 'Mild Chili + Cornbread', 'emoji': '🫕', 'kid_score': 4,
        'prep_time': '1 hr', 'difficulty': 'Easy',
        'desc': 'Mild chili base, adults spice their own bowl. Cornbread is loved by all ages.',
        'kid_tip': 'Keep the base totally mild. Adults can add hot sauce. Cornbread squares are great for little hands.',
        'tags': ['comfort', 'make-ahead', 'warming'],
    },
    {
        'name': 'Lo Mein Noodle Night', 'emoji': '🥢', 'kid_score': 4,
        'prep_time': '35 min', 'difficulty': 'Easy',
        'desc': 'Noodles with chicken, broccoli, carrots. Plain noodles with butter for picky eaters.',
        'kid_tip': 'Set aside plain noodles with sesame oil before adding sauces. Kids love slurping noodles!',
        'tags': ['quick', 'veggie-packed', 'fun'],
    },
    {
        'name': 'Backyard Burgers', 'emoji': '🍔', 'kid_score': 5,
        'prep_time': '45 min', 'difficulty': 'Easy',
        'desc': 'Classic grill night. Smash burgers for adults, simple patties for kids.',
        'kid_tip': 'Make slider-sized patties for little ones. Soft buns are key at age 1-3.',
        'tags': ['grill', 'crowd-pleaser'],
    },
    {
        'name': 'Chicken Soup + Crusty Bread', 'emoji': '🍲', 'kid_score': 4,
        'prep_time': '90 min', 'difficulty': 'Medium',
        'desc': 'Hearty and comforting. Kids love the noodles, adults love the depth.',
        'kid_tip': 'Chop veg fine for toddlers. Soft noodles in broth = toddler heaven.',
        'tags': ['comfort', 'make-ahead', 'warming'],
    },
    {
        'name': 'Baked Fish Tacos with Slaw', 'emoji': '🐠', 'kid_score': 3,
        'prep_time': '45 min', 'difficulty': 'Medium',
        'desc': 'Crispy baked fish, mild slaw, crema. Kids get plain fish in a soft tortilla.',
        'kid_tip': 'Bake not fry. Remove skin & bones. Plain fish in a soft wrap works great.',
        'tags': ['healthy', 'customisable'],
    },
    {
        'name': 'Sunday Roast Chicken', 'emoji': '🐔', 'kid_score': 4,
        'prep_time': '2 hr', 'difficulty': 'Involved',
        'desc': 'Whole roasted chicken, roasted potatoes and veg. Classic and impressive.',
        'kid_tip': 'Drumsticks are fun for older kids. Shred thigh meat for 1-2 year olds. Soft roast carrots are a hit.',
        'tags': ['special-occasion', 'impressive', 'traditional'],
    },
]

# Filters offered for browsing the curated list
MEAL_FILTERS = [
    'all', 'kid-staple', 'crowd-pleaser', 'quick', 'make-ahead',
    'healthy', 'comfort', 'special-occasion',
]
